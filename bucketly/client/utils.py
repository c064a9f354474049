"""
Contains general tools useful when accessing object storage services.
"""
"""
Copyright 2011-2013 Gregory Holt

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""
import base64
import hashlib
from email.utils import formatdate
from urllib import parse


def quote(value, safe='/'):
    """
    Much like parse.quote in that it returns a URL encoded string
    for the given value, protecting the safe characters; but this
    version also accepts non-str values such as ints.
    """
    if isinstance(value, bytes):
        value = value.decode('utf8')
    elif not isinstance(value, str):
        value = str(value)
    return parse.quote(value, safe)


def headers_to_dict(headers):
    """
    Converts a sequence of (name, value) tuples into a dict where if
    a given name occurs more than once its value in the dict will be
    a list of values.
    """
    hdrs = {}
    for h, v in headers:
        h = h.lower()
        if h in hdrs:
            if isinstance(hdrs[h], list):
                hdrs[h].append(v)
            else:
                hdrs[h] = [hdrs[h], v]
        else:
            hdrs[h] = v
    return hdrs


def http_date(timeval=None):
    """
    Returns the RFC 1123 formatted date for the given time.time()
    value, or for now if None; example: Thu, 17 Nov 2005 18:49:58 GMT
    """
    return formatdate(timeval, usegmt=True)


def content_md5(body):
    """
    Returns the base64 encoded MD5 digest of body, the form used by
    the Content-MD5 header.
    """
    return base64.b64encode(hashlib.md5(body).digest()).decode('ascii')


def get_header(headers, name, default=None):
    """
    Returns the value of the header name from the dict of headers,
    ignoring case, or default if not present.
    """
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return default
