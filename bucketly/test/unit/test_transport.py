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
import http.client
import socket
import time
import unittest
from unittest import mock

from bucketly.client.models import BucketHandle, ClientConfig, Failure, \
    Success
from bucketly.client.request import build_request
from bucketly.client.scheduler import Scheduler
from bucketly.client.transport import CANCELLED, COMPLETED, IDLE, \
    IN_FLIGHT, CooperativeRequest, blocking_request, connection_target, \
    parse_response, serialize_request
from bucketly.test.unit.fakestore import FakeStore


HANDLE = BucketHandle.for_name('mybucket')


def run(scheduler, task, max_ticks=300):
    for _ in range(max_ticks):
        if task.done:
            break
        scheduler.tick()
    return task


def unused_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def local_addresses(*ports):
    return [
        (socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, '',
         ('127.0.0.1', port))
        for port in ports]


def local_addresses(*ports):
    return [
        (socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, '',
         ('127.0.0.1', port))
        for port in ports]


class TestHelpers(unittest.TestCase):

    def test_connection_target_direct(self):
        request = build_request(
            ClientConfig('a', 'b'), HANDLE, 'GET', 'k', query='?max-keys=1')
        self.assertEqual(
            connection_target(request),
            ('mybucket.s3.amazonaws.com', 80, '/k?max-keys=1'))

    def test_connection_target_bucket(self):
        request = build_request(ClientConfig('a', 'b'), HANDLE, 'GET')
        self.assertEqual(
            connection_target(request),
            ('mybucket.s3.amazonaws.com', 80, '/'))

    def test_connection_target_proxy(self):
        for proxy in ('http://127.0.0.1:8888', '127.0.0.1:8888'):
            request = build_request(
                ClientConfig('a', 'b', proxy=proxy), HANDLE, 'GET', 'k')
            self.assertEqual(
                connection_target(request),
                ('127.0.0.1', 8888, 'http://mybucket.s3.amazonaws.com/k'))

    def test_serialize_request(self):
        request = build_request(
            ClientConfig('a', 'b', proxy='http://127.0.0.1:8888'), HANDLE,
            'PUT', 'k', body=b'data')
        raw = serialize_request(request, connection_target(request)[2])
        head, body = raw.split(b'\r\n\r\n', 1)
        lines = head.decode('latin-1').split('\r\n')
        self.assertEqual(
            lines[0], 'PUT http://mybucket.s3.amazonaws.com/k HTTP/1.1')
        self.assertTrue('Host: mybucket.s3.amazonaws.com' in lines)
        self.assertTrue('Connection: close' in lines)
        self.assertTrue('Content-Length: 4' in lines)
        self.assertTrue(
            'Authorization: %s' % request.headers['Authorization'] in lines)
        self.assertEqual(body, b'data')

    def test_parse_response(self):
        response = parse_response(
            b'HTTP/1.1 200 OK\r\nContent-Length: 2\r\nX-A: 1\r\nX-A: 2\r\n'
            b'\r\nhi', 'GET')
        self.assertEqual(response.status, 200)
        self.assertEqual(response.reason, 'OK')
        self.assertEqual(
            response.headers, {'content-length': '2', 'x-a': ['1', '2']})
        self.assertEqual(response.body, b'hi')

    def test_parse_response_chunked(self):
        response = parse_response(
            b'HTTP/1.1 200 OK\r\nTransfer-Encoding: chunked\r\n\r\n'
            b'2\r\nhi\r\n3\r\n!!!\r\n0\r\n\r\n', 'GET')
        self.assertEqual(response.body, b'hi!!!')

    def test_parse_response_until_close(self):
        response = parse_response(
            b'HTTP/1.0 404 Not Found\r\n\r\n<Error/>', 'GET')
        self.assertEqual(response.status, 404)
        self.assertEqual(response.body, b'<Error/>')

    def test_parse_response_head(self):
        response = parse_response(
            b'HTTP/1.1 200 OK\r\nContent-Length: 100\r\n\r\n', 'HEAD')
        self.assertEqual(response.headers['content-length'], '100')
        self.assertEqual(response.body, b'')

    def test_parse_response_nothing(self):
        self.assertRaises(
            http.client.HTTPException, parse_response, b'', 'GET')


class TestBlockingRequest(unittest.TestCase):

    def setUp(self):
        self.store = FakeStore().start()
        self.store.add_object('mybucket', 'greeting', b'hello')
        self.config = self.store.config()

    def tearDown(self):
        self.store.stop()

    def test_success(self):
        request = build_request(self.config, HANDLE, 'GET', 'greeting')
        result = blocking_request(request)
        self.assertTrue(isinstance(result, Success))
        self.assertFalse(result.is_error)
        self.assertTrue(result.ok)
        self.assertTrue(result.request is request)
        self.assertEqual(result.response.status, 200)
        self.assertEqual(result.response.body, b'hello')
        self.assertEqual(result.response.headers['content-length'], '5')

    def test_sent_through_proxy(self):
        request = build_request(self.config, HANDLE, 'GET', 'greeting')
        blocking_request(request)
        method, path, headers, body = self.store.requests[0]
        self.assertEqual(method, 'GET')
        self.assertEqual(path, request.url)
        self.assertEqual(headers['Host'], 'mybucket.s3.amazonaws.com')

    def test_error_status_is_success(self):
        request = build_request(self.config, HANDLE, 'GET', 'missing')
        result = blocking_request(request)
        self.assertFalse(result.is_error)
        self.assertFalse(result.ok)
        self.assertEqual(result.response.status, 404)
        self.assertTrue(b'NoSuchKey' in result.response.body)

    def test_connection_refused(self):
        config = ClientConfig(
            'a', 'b', proxy='http://127.0.0.1:%d' % unused_port())
        request = build_request(config, HANDLE, 'GET', 'greeting')
        result = blocking_request(request)
        self.assertTrue(isinstance(result, Failure))
        self.assertTrue(result.is_error)
        self.assertFalse(result.ok)
        self.assertTrue(result.request is request)
        self.assertTrue(result.message)

    def test_timeout(self):
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(('127.0.0.1', 0))
        listener.listen(5)
        try:
            config = ClientConfig(
                'a', 'b', proxy='http://127.0.0.1:%d' %
                listener.getsockname()[1])
            request = build_request(config, HANDLE, 'GET', 'greeting')
            result = blocking_request(request, timeout=0.2)
        finally:
            listener.close()
        self.assertTrue(result.is_error)
        self.assertTrue('timed out' in result.message)

    def test_verbose(self):
        messages = []
        request = build_request(self.config, HANDLE, 'GET', 'greeting')
        blocking_request(
            request, verbose=lambda msg, *args: messages.append(msg % args))
        self.assertTrue(messages[0].startswith(
            '> GET http://mybucket.s3.amazonaws.com/greeting '))
        self.assertEqual(messages[-1], '< 200 OK')


class TestCooperativeRequest(unittest.TestCase):

    def setUp(self):
        self.store = FakeStore().start()
        self.store.add_object('mybucket', 'greeting', b'hello')
        self.store.add_object('mybucket', 'big', b'x' * 300000)
        self.config = self.store.config()
        self.scheduler = Scheduler()
        self.results = []
        self.listener = None

    def tearDown(self):
        self.store.stop()
        if self.listener:
            self.listener.close()

    def _task(self, key, method='GET', config=None, **kwargs):
        request = build_request(config or self.config, HANDLE, method, key)
        return CooperativeRequest(
            request, self.results.append, self.scheduler, **kwargs)

    def _silent_config(self):
        self.listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.listener.bind(('127.0.0.1', 0))
        self.listener.listen(5)
        return ClientConfig(
            'a', 'b',
            proxy='http://127.0.0.1:%d' % self.listener.getsockname()[1])

    def test_success(self):
        task = self._task('greeting').start()
        self.assertEqual(task.state, IDLE)
        self.assertEqual(self.results, [])
        self.assertEqual(self.scheduler.pending, 1)
        run(self.scheduler, task)
        self.assertEqual(task.state, COMPLETED)
        self.assertEqual(len(self.results), 1)
        result = self.results[0]
        self.assertTrue(result is task.result)
        self.assertTrue(isinstance(result, Success))
        self.assertEqual(result.response.status, 200)
        self.assertEqual(result.response.body, b'hello')
        self.assertEqual(self.scheduler.pending, 0)
        self.assertEqual(task._sock, None)

    def test_nothing_happens_without_ticks(self):
        task = self._task('greeting').start()
        time.sleep(0.1)
        self.assertEqual(task.state, IDLE)
        self.assertEqual(self.store.requests, [])

    def test_large_body_small_chunks(self):
        task = self._task('big', chunk_size=4096).start()
        run(self.scheduler, task, max_ticks=1000)
        self.assertEqual(self.results[0].response.body, b'x' * 300000)

    def test_error_status_is_success(self):
        task = self._task('missing').start()
        run(self.scheduler, task)
        self.assertFalse(self.results[0].is_error)
        self.assertEqual(self.results[0].response.status, 404)

    def test_head(self):
        task = self._task('big', method='HEAD').start()
        run(self.scheduler, task)
        response = self.results[0].response
        self.assertEqual(response.status, 200)
        self.assertEqual(response.headers['content-length'], '300000')
        self.assertEqual(response.body, b'')

    def test_connection_refused(self):
        config = ClientConfig(
            'a', 'b', proxy='http://127.0.0.1:%d' % unused_port())
        task = self._task('greeting', config=config).start()
        run(self.scheduler, task)
        self.assertEqual(task.state, COMPLETED)
        self.assertEqual(len(self.results), 1)
        self.assertTrue(isinstance(self.results[0], Failure))
        self.assertEqual(self.scheduler.pending, 0)
        self.assertEqual(task._sock, None)

    def test_next_address_after_refused(self):
        addresses = local_addresses(unused_port(), self.store.port)
        with mock.patch('socket.getaddrinfo', return_value=addresses):
            task = self._task('missing').start()
            run(self.scheduler, task)
            blocking = blocking_request(task.request)
        self.assertEqual(blocking.response.status, 404)
        self.assertFalse(task.result.is_error)
        self.assertEqual(task.result.response.status, 404)
        self.assertEqual(task._sock, None)

    def test_every_address_refused(self):
        addresses = local_addresses(unused_port(), unused_port())
        with mock.patch('socket.getaddrinfo', return_value=addresses):
            task = self._task('greeting').start()
            run(self.scheduler, task)
        self.assertTrue(isinstance(task.result, Failure))
        self.assertTrue('refused' in task.result.message.lower())
        self.assertEqual(task._sock, None)
        self.assertEqual(self.store.requests, [])

    def test_process(self):
        request = build_request(self.config, HANDLE, 'GET', 'greeting')
        task = CooperativeRequest(
            request, self.results.append, self.scheduler,
            process=lambda result: result._replace(
                value=result.response.body.upper())).start()
        run(self.scheduler, task)
        self.assertEqual(task.result.value, b'HELLO')
        self.assertTrue(self.results[0] is task.result)

    def test_concurrent(self):
        first = self._task('greeting').start()
        second = self._task('big').start()
        third = self._task('missing').start()
        self.assertEqual(self.scheduler.pending, 3)
        for _ in range(300):
            if first.done and second.done and third.done:
                break
            self.scheduler.tick()
        self.assertEqual(len(self.results), 3)
        self.assertEqual(first.result.response.body, b'hello')
        self.assertEqual(len(second.result.response.body), 300000)
        self.assertEqual(third.result.response.status, 404)
        self.assertEqual(self.scheduler.pending, 0)

    def test_step_is_bounded(self):
        task = self._task(
            'greeting', config=self._silent_config(),
            slice_seconds=0.05).start()
        for _ in range(5):
            begin = time.time()
            self.scheduler.tick()
            self.assertTrue(time.time() - begin < 1)
        self.assertEqual(task.state, IN_FLIGHT)
        self.assertEqual(self.results, [])
        self.assertTrue(task.cancel())
        self.assertEqual(task._sock, None)

    def test_cancel_in_flight(self):
        self.store.delays['greeting'] = 0.5
        task = self._task('greeting').start()
        for _ in range(3):
            self.scheduler.tick()
        self.assertEqual(task.state, IN_FLIGHT)
        self.assertTrue(task.cancel())
        self.assertEqual(task.state, CANCELLED)
        self.assertTrue(task.done)
        self.assertEqual(task._sock, None)
        self.assertEqual(self.scheduler.pending, 0)
        time.sleep(0.7)
        for _ in range(5):
            self.scheduler.tick()
            task.step()
        self.assertEqual(self.results, [])
        self.assertEqual(task.result, None)
        self.assertFalse(task.cancel())

    def test_cancel_with_response_waiting(self):
        task = self._task('greeting').start()
        self.scheduler.tick()
        self.scheduler.tick()
        time.sleep(0.3)
        self.assertTrue(task.cancel())
        for _ in range(5):
            self.scheduler.tick()
        self.assertEqual(self.results, [])

    def test_cancel_idle(self):
        task = self._task('greeting').start()
        self.assertTrue(task.cancel())
        self.scheduler.tick()
        self.assertEqual(self.results, [])
        self.assertEqual(self.store.requests, [])

    def test_cancel_completed(self):
        task = self._task('greeting').start()
        run(self.scheduler, task)
        self.assertFalse(task.cancel())
        self.assertEqual(task.state, COMPLETED)
        self.assertEqual(len(self.results), 1)

    def test_callback_once(self):
        task = self._task('greeting').start()
        run(self.scheduler, task)
        for _ in range(3):
            task.step()
            self.scheduler.tick()
        self.assertEqual(len(self.results), 1)

    def test_start_twice(self):
        task = self._task('greeting')
        self.assertTrue(task.start() is task)
        task.start()
        self.assertEqual(self.scheduler.pending, 1)

    def test_verbose(self):
        messages = []
        task = self._task(
            'greeting',
            verbose=lambda msg, *args: messages.append(msg % args)).start()
        run(self.scheduler, task)
        self.assertTrue(messages[0].startswith('> GET '))
        self.assertEqual(messages[-1], '< 200 OK')


if __name__ == '__main__':
    unittest.main()
