"""
Contains the simple value types passed between the parts of the
client: configuration, requests, responses and results.

=============  =========================================================
ClientConfig   Credentials, proxy and host base given to a Client.
BucketHandle   A bucket name and its derived virtual host name.
Request        One fully built, signed HTTP request.
Response       One completed HTTP exchange.
Success        Result of a request that obtained a Response.
Failure        Result of a request that obtained no Response at all.
=============  =========================================================
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
import collections


#: The host name virtual bucket hosts are formed under by default.
DEFAULT_HOST_BASE = 's3.amazonaws.com'


class ClientConfig(collections.namedtuple(
        'ClientConfig', 'access_key secret_key proxy host_base')):
    """
    Immutable configuration for a
    :py:class:`bucketly.client.client.Client`.

    :param access_key: The access key id placed in the Authorization
        header.
    :param secret_key: The secret key requests are signed with.
    :param proxy: The URL of a forward HTTP proxy all requests are
        sent through, such as ``http://127.0.0.1:8888``. Default:
        None.
    :param host_base: The host name bucket virtual hosts are formed
        under. Default: s3.amazonaws.com
    """
    __slots__ = ()

    def __new__(cls, access_key, secret_key, proxy=None,
                host_base=DEFAULT_HOST_BASE):
        return super(ClientConfig, cls).__new__(
            cls, access_key, secret_key, proxy or None,
            host_base or DEFAULT_HOST_BASE)

    def __repr__(self):
        return 'ClientConfig(access_key=%r, secret_key=%r, proxy=%r, ' \
            'host_base=%r)' % (
                self.access_key, '...' if self.secret_key else None,
                self.proxy, self.host_base)


class BucketHandle(collections.namedtuple('BucketHandle', 'name host')):
    """
    The name of a bucket and the virtual host name requests for it
    are addressed to.
    """
    __slots__ = ()

    @classmethod
    def for_name(cls, name, host_base=DEFAULT_HOST_BASE):
        return cls(name, '%s.%s' % (name, host_base))


class Request(collections.namedtuple(
        'Request', 'method url headers body proxy')):
    """
    A fully built request.

    :method: The HTTP method ('GET', 'HEAD', etc.)
    :url: The absolute http:// URL, query string included.
    :headers: A dict of header names to str values, with the case of
        the names preserved for transmission.
    :body: The bytes to send or None.
    :proxy: The URL of the forward proxy to connect to or None.
    """
    __slots__ = ()


class Response(collections.namedtuple(
        'Response', 'status reason headers body')):
    """
    A completed HTTP exchange.

    :status: An int for the HTTP status code.
    :reason: The str for the HTTP status (ex: "OK").
    :headers: A dict with all lowercase keys of the HTTP headers; if
        a header has multiple values, it will be a list.
    :body: The bytes of the response body.
    """
    __slots__ = ()


class Success(collections.namedtuple('Success', 'request response value')):
    """
    The result of a request that obtained an HTTP response, whatever
    its status code. Callers inspect ``response.status`` (or
    :py:attr:`ok`) to decide what the response means.

    :request: The originating :py:class:`Request`.
    :response: The :py:class:`Response` obtained.
    :value: The product of the operation that issued the request,
        such as a normalized listing or the body bytes; None if the
        operation produces nothing.
    """
    __slots__ = ()

    is_error = False

    def __new__(cls, request, response, value=None):
        return super(Success, cls).__new__(cls, request, response, value)

    @property
    def ok(self):
        """True if the response status is 2xx."""
        return self.response.status // 100 == 2


class Failure(collections.namedtuple('Failure', 'request message')):
    """
    The result of a request for which no HTTP response was obtained:
    DNS failures, refused or reset connections, timeouts.

    :request: The originating :py:class:`Request`.
    :message: A str describing what went wrong.
    """
    __slots__ = ()

    is_error = True
    ok = False
