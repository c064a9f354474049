"""
Computes the signature that authenticates each request, as described
by the S3 REST authentication scheme (signature version 2).

The string signed is::

    METHOD\\n
    Content-MD5\\n
    Content-Type\\n
    Date\\n
    x-amz-name:value\\n (one line per x-amz- header, sorted by name)
    /bucket/key

Absent headers contribute an empty line. The result is placed in the
Authorization header as ``AWS <access_key>:<base64 HMAC-SHA1>``.
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
import hmac

from bucketly.client.utils import get_header


AMZ_PREFIX = 'x-amz-'


def canonical_amz_headers(headers):
    """
    Returns the block of ``name:value\\n`` lines for the x-amz-
    headers in the dict of headers, names lowercased and sorted,
    values exactly as given; '' if there are none. Names that only
    differ by case are folded into one line, their values comma
    joined in the order they will be sent.
    """
    amz = {}
    for h, v in headers.items():
        h = h.lower()
        if h.startswith(AMZ_PREFIX):
            amz.setdefault(h, []).append(v)
    return ''.join(
        '%s:%s\n' % (h, ','.join(amz[h])) for h in sorted(amz))


def canonical_resource(bucket, key=None):
    return '/%s/%s' % (bucket, key or '')


def string_to_sign(method, bucket, key, headers):
    """
    Returns the canonical string for the request described.

    :param method: The request method ('GET', 'PUT', etc.)
    :param bucket: The bucket name.
    :param key: The object key, as it appears in the request path,
        or None for bucket level requests.
    :param headers: The dict of request headers.
    """
    return '%s\n%s\n%s\n%s\n%s%s' % (
        method,
        get_header(headers, 'Content-MD5', ''),
        get_header(headers, 'Content-Type', ''),
        get_header(headers, 'Date', ''),
        canonical_amz_headers(headers),
        canonical_resource(bucket, key))


def signature(secret_key, text):
    """
    Returns the base64 encoded HMAC-SHA1 of text keyed by secret_key.
    """
    digest = hmac.new(
        (secret_key or '').encode('utf8'), text.encode('utf8'),
        hashlib.sha1).digest()
    return base64.b64encode(digest).decode('ascii')


def sign(config, method, bucket, key, headers):
    """
    Adds the Authorization header to the dict of headers, signed
    with the credentials in config, and returns the headers.

    Credentials are not validated; bad ones just produce a signature
    the service will reject. The headers must not be changed after
    signing.

    :param config: The :py:class:`bucketly.client.models.ClientConfig`
        with the access_key and secret_key.
    :param method: The request method ('GET', 'PUT', etc.)
    :param bucket: The bucket name.
    :param key: The object key or None.
    :param headers: The dict of request headers to sign and update.
    """
    text = string_to_sign(method, bucket, key, headers)
    headers['Authorization'] = 'AWS %s:%s' % (
        config.access_key or '', signature(config.secret_key, text))
    return headers
