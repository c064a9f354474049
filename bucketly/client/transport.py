"""
Executes built requests, either blocking the caller or cooperatively
in slices driven by a :py:class:`bucketly.client.scheduler.Scheduler`.

Both ways produce the same results: a
:py:class:`bucketly.client.models.Success` for any HTTP exchange that
completed, whatever its status code, and a
:py:class:`bucketly.client.models.Failure` when no response could be
obtained at all. One connection is opened per request and it is
always closed once the request completes, fails or is cancelled.
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
import errno
import http.client
import io
import os
import selectors
import socket
from urllib import parse

from bucketly.client.models import Failure, Response, Success
from bucketly.client.utils import headers_to_dict


#: Seconds a blocking request may wait on any one socket operation.
DEFAULT_TIMEOUT = 60
#: Upper bound in seconds on the wait done by a single step.
SLICE_SECONDS = 0.1
#: Maximum size to read at one time.
CHUNK_SIZE = 65536

IDLE = 'idle'
IN_FLIGHT = 'in-flight'
COMPLETED = 'completed'
CANCELLED = 'cancelled'

READ = selectors.EVENT_READ
WRITE = selectors.EVENT_WRITE

#: Errors meaning no HTTP response was obtained.
TRANSPORT_ERRORS = (OSError, http.client.HTTPException)


def _null_verbose(*args, **kwargs):
    pass


def _proxy_netloc(proxy):
    if '//' not in proxy:
        proxy = 'http://' + proxy
    return parse.urlsplit(proxy)


def connection_target(request):
    """
    Returns (host, port, target) for the request: where to connect
    and what to place on the request line. With a proxy, the
    connection goes to the proxy and the target is the absolute URL.
    """
    if request.proxy:
        proxy = _proxy_netloc(request.proxy)
        return proxy.hostname, proxy.port or 80, request.url
    parsed = parse.urlsplit(request.url)
    target = parsed.path or '/'
    if parsed.query:
        target += '?' + parsed.query
    return parsed.hostname, parsed.port or 80, target


def serialize_request(request, target):
    """
    Returns the bytes of the HTTP/1.1 request. Only the hop level
    Host, Connection and Accept-Encoding headers are added to the
    request's own headers.
    """
    lines = [
        '%s %s HTTP/1.1' % (request.method, target),
        'Host: %s' % parse.urlsplit(request.url).netloc,
        'Connection: close',
        'Accept-Encoding: identity']
    lines.extend('%s: %s' % (k, v) for k, v in request.headers.items())
    head = ('\r\n'.join(lines) + '\r\n\r\n').encode('latin-1')
    return head + (request.body or b'')


class _BufferSocket(object):
    """
    Just enough of a socket for http.client.HTTPResponse to parse an
    already received response from.
    """

    def __init__(self, data):
        self.data = data

    def makefile(self, *args, **kwargs):
        return io.BytesIO(self.data)


def parse_response(raw, method):
    """
    Returns the :py:class:`bucketly.client.models.Response` parsed
    from the complete raw bytes received for a request using method.
    Raises http.client.HTTPException subclasses if raw does not hold
    a complete response.
    """
    resp = http.client.HTTPResponse(_BufferSocket(raw), method=method)
    try:
        resp.begin()
        headers = headers_to_dict(resp.getheaders())
        body = resp.read()
    finally:
        resp.close()
    return Response(resp.status, resp.reason, headers, body)


def log_request(verbose, request):
    verbose_headers = '  '.join(
        '%s: %s' % (k, v) for k, v in sorted(request.headers.items()))
    verbose('> %s %s %s', request.method, request.url, verbose_headers)


def log_result(verbose, result):
    if result.is_error:
        verbose('< - %s', result.message)
    else:
        verbose(
            '< %s %s', result.response.status, result.response.reason)


def describe_error(err):
    return '%s %s' % (type(err).__name__, err)


def blocking_request(request, timeout=DEFAULT_TIMEOUT, verbose=None):
    """
    Performs the request, returning only once the whole response has
    been read or the attempt failed.

    :param request: The :py:class:`bucketly.client.models.Request`.
    :param timeout: Seconds any one socket operation may take before
        the attempt is abandoned as a failure.
    :param verbose: A ``func(msg, *args)`` for debug messages.
    :returns: A Success or Failure.
    """
    verbose = verbose or _null_verbose
    log_request(verbose, request)
    host, port, target = connection_target(request)
    conn = http.client.HTTPConnection(host, port, timeout=timeout)
    try:
        conn.request(request.method, target, request.body, request.headers)
        resp = conn.getresponse()
        response = Response(
            resp.status, resp.reason, headers_to_dict(resp.getheaders()),
            resp.read())
        result = Success(request, response)
    except TRANSPORT_ERRORS as err:
        result = Failure(request, describe_error(err))
    finally:
        conn.close()
    log_result(verbose, result)
    return result


class CooperativeRequest(object):
    """
    Performs a request a slice at a time from the ticks of a
    :py:class:`bucketly.client.scheduler.Scheduler`, calling
    ``callback(result)`` once the request completes.

    The request moves through the states ``idle``, ``in-flight`` and
    then ``completed`` or ``cancelled``; both of those are final.
    Each :py:func:`step` waits at most slice_seconds for the socket to
    become ready, does what socket work it can without blocking, and
    returns. There is no overall deadline: the request runs until it
    completes, fails, or is cancelled.

    :param request: The :py:class:`bucketly.client.models.Request`.
    :param callback: The ``func(result)`` called exactly once, from
        within the tick that completed the request, unless the
        request is cancelled first.
    :param scheduler: The Scheduler to register with.
    :param slice_seconds: Upper bound on the wait done in one step.
    :param chunk_size: Maximum size to read at one time.
    :param verbose: A ``func(msg, *args)`` for debug messages.
    :param process: A ``func(result)`` returning the result to keep
        as :py:attr:`result` and pass to the callback; default keeps
        the transport result as is.
    """

    def __init__(self, request, callback, scheduler,
                 slice_seconds=SLICE_SECONDS, chunk_size=CHUNK_SIZE,
                 verbose=None, process=None):
        self.request = request
        self.callback = callback
        self.scheduler = scheduler
        self.slice_seconds = slice_seconds
        self.chunk_size = chunk_size
        self.verbose = verbose or _null_verbose
        self.process = process
        #: One of idle, in-flight, completed or cancelled.
        self.state = IDLE
        #: The Success or Failure once completed, after any process.
        self.result = None
        self._handle = None
        self._exchange = None
        self._want = None
        self._sock = None
        self._selector = None
        self._registered = None

    def __repr__(self):
        return '<CooperativeRequest %s %s %s>' % (
            self.request.method, self.request.url, self.state)

    @property
    def done(self):
        """True once the request has completed or been cancelled."""
        return self.state in (COMPLETED, CANCELLED)

    def start(self):
        """
        Registers with the scheduler; the first slice of work happens
        on the next tick. Returns self.
        """
        if self.state == IDLE and self._handle is None:
            log_request(self.verbose, self.request)
            self._handle = self.scheduler.register(self.step)
        return self

    def cancel(self):
        """
        Stops the request, discarding its connection. The callback
        will never be called after this, even if the response had
        already arrived. Returns False if the request had already
        completed or been cancelled.
        """
        if self.done:
            return False
        self.state = CANCELLED
        self.scheduler.unregister(self._handle)
        self._close()
        self.verbose('< - cancelled %s %s', self.request.method,
                     self.request.url)
        return True

    def step(self):
        """
        Performs one slice of work; called by the scheduler on each
        tick.
        """
        if self.done:
            return
        try:
            if self.state == IDLE:
                self.state = IN_FLIGHT
                self._exchange = self._run()
            elif not self._ready(self._want):
                return
            self._want = next(self._exchange)
        except StopIteration as stop:
            self._finish(Success(self.request, stop.value))
        except TRANSPORT_ERRORS as err:
            self._finish(Failure(self.request, describe_error(err)))

    def _ready(self, want):
        if self._registered is None:
            self._selector.register(self._sock, want)
        elif self._registered != want:
            self._selector.modify(self._sock, want)
        self._registered = want
        return bool(self._selector.select(self.slice_seconds))

    def _run(self):
        host, port, target = connection_target(self.request)
        addresses = socket.getaddrinfo(host, port, 0, socket.SOCK_STREAM)
        self._selector = selectors.DefaultSelector()
        error = None
        for family, socktype, proto, _, address in addresses:
            try:
                self._sock = socket.socket(family, socktype, proto)
            except OSError as exc:
                error = exc
                continue
            self._sock.setblocking(False)
            err = self._sock.connect_ex(address)
            if err in (errno.EINPROGRESS, errno.EWOULDBLOCK):
                yield WRITE
                err = self._sock.getsockopt(
                    socket.SOL_SOCKET, socket.SO_ERROR)
            if not err:
                break
            error = OSError(err, os.strerror(err))
            self._drop_socket()
        else:
            raise error or OSError('getaddrinfo returns an empty list')
        data = memoryview(serialize_request(self.request, target))
        while data:
            try:
                sent = self._sock.send(data)
            except BlockingIOError:
                yield WRITE
            else:
                data = data[sent:]
        chunks = []
        while True:
            yield READ
            while True:
                try:
                    chunk = self._sock.recv(self.chunk_size)
                except BlockingIOError:
                    break
                if not chunk:
                    return parse_response(
                        b''.join(chunks), self.request.method)
                chunks.append(chunk)

    def _finish(self, result):
        self.state = COMPLETED
        self.scheduler.unregister(self._handle)
        self._close()
        log_result(self.verbose, result)
        if self.process:
            result = self.process(result)
        self.result = result
        self.callback(result)

    def _drop_socket(self):
        if self._registered is not None:
            self._selector.unregister(self._sock)
            self._registered = None
        self._sock.close()
        self._sock = None

    def _close(self):
        if self._exchange is not None:
            self._exchange.close()
            self._exchange = None
        if self._selector is not None:
            self._selector.close()
            self._selector = None
        if self._sock is not None:
            self._sock.close()
            self._sock = None
