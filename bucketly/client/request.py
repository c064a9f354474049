"""
Assembles the method, URL, headers and body of one request.
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
from bucketly.client.models import Request
from bucketly.client.signer import sign
from bucketly.client.utils import content_md5, http_date, quote


#: The list query parameters in the order they are sent.
LIST_PARAMETERS = ('delimiter', 'prefix', 'max-keys', 'marker')


def default_headers(body=None, timeval=None):
    """
    Returns the headers every request starts with: the Date and, if
    there is a body, its Content-Length and Content-MD5.
    """
    headers = {'Date': http_date(timeval)}
    if body is not None:
        headers['Content-Length'] = str(len(body))
        headers['Content-MD5'] = content_md5(body)
    return headers


def merge_headers(hdrs, headers):
    """
    Updates the dict hdrs with the headers given, replacing any
    existing header of the same name regardless of case.
    """
    for name, value in headers.items():
        lowered = name.lower()
        for existing in [h for h in hdrs if h.lower() == lowered]:
            del hdrs[existing]
        hdrs[name] = str(value)
    return hdrs


def query_string(params):
    """
    Returns the query string for the (name, value) pairs given, each
    value URL encoded, skipping None values; '' if nothing remains.
    """
    parts = [
        '%s=%s' % (name, quote(value, safe=''))
        for name, value in params if value is not None]
    if not parts:
        return ''
    return '?' + '&'.join(parts)


def list_query(delimiter=None, prefix=None, max_keys=None, marker=None):
    return query_string(
        zip(LIST_PARAMETERS, (delimiter, prefix, max_keys, marker)))


def object_path(key):
    """
    Returns the URL encoded form of the object key, slashes kept.
    Leading/trailing slashes are allowed in object names, so they are
    not stripped.
    """
    if key is None:
        return None
    return quote(key)


def build_request(config, handle, method, key=None, body=None,
                  headers=None, query='', timeval=None):
    """
    Returns a signed :py:class:`bucketly.client.models.Request`.

    :param config: The :py:class:`bucketly.client.models.ClientConfig`.
    :param handle: The :py:class:`bucketly.client.models.BucketHandle`
        the request is for.
    :param method: The request method ('GET', 'HEAD', etc.)
    :param key: The object key or None for bucket level requests.
    :param body: The request body as bytes or None.
    :param headers: A dict of additional headers; these are applied
        after the computed defaults and so override them.
    :param query: The query string to append, including its ``?``.
    :param timeval: The time.time() value for the Date header;
        default now.
    """
    if body is not None and not isinstance(body, bytes):
        raise ValueError('Request body must be bytes, not %s.' % (
            type(body).__name__,))
    path = object_path(key)
    hdrs = default_headers(body, timeval)
    if headers:
        merge_headers(hdrs, headers)
    sign(config, method, handle.name, path, hdrs)
    url = 'http://%s/%s%s' % (handle.host, path or '', query)
    return Request(method, url, hdrs, body, config.proxy)
