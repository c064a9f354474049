"""
Contains the Client class, the starting point for accessing an
object storage service.
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
from bucketly import VERSION
from bucketly.client.bucket import Bucket
from bucketly.client.models import BucketHandle
from bucketly.client.scheduler import Scheduler
from bucketly.client.transport import CHUNK_SIZE, DEFAULT_TIMEOUT, \
    SLICE_SECONDS, CooperativeRequest, blocking_request


class Client(object):
    """
    Holds the configuration shared by requests to any number of
    buckets and executes those requests.

    Requests given a callback run cooperatively from the ticks of
    :py:attr:`scheduler`; the host must call ``client.scheduler.tick()``
    periodically (or use :py:class:`bucketly.concurrency.GreenTicker`)
    for them to make progress. Requests without a callback block.

    :param config: The :py:class:`bucketly.client.models.ClientConfig`
        with the credentials and proxy to use.
    :param scheduler: The
        :py:class:`bucketly.client.scheduler.Scheduler` cooperative
        requests register with. Default: a new Scheduler.
    :param timeout: Seconds any one socket operation of a blocking
        request may take. Cooperative requests have no timeout.
    :param slice_seconds: Upper bound on the wait done by each step of
        a cooperative request.
    :param chunk_size: Maximum size to read at one time.
    :param verbose: Set to a ``func(msg, *args)`` that will be called
        with debug messages. Constructing a string for output can be
        done with msg % args.
    :param verbose_id: Set to a string you wish verbose messages to
        be prepended with; can help in identifying output when
        multiple Clients are in use.
    """

    def __init__(self, config, scheduler=None, timeout=DEFAULT_TIMEOUT,
                 slice_seconds=SLICE_SECONDS, chunk_size=CHUNK_SIZE,
                 verbose=None, verbose_id=''):
        self.config = config
        self.scheduler = scheduler or Scheduler()
        self.timeout = timeout
        self.slice_seconds = slice_seconds
        self.chunk_size = chunk_size
        #: The string to use for the User-Agent request header.
        self.user_agent = 'Bucketly v%s' % VERSION
        if verbose:
            self.verbose = lambda m, *a, **k: verbose(
                self._verbose_id + m, *a, **k)
        else:
            self.verbose = lambda *a, **k: None
        self.verbose_id = verbose_id
        self._verbose_id = self.verbose_id
        if self._verbose_id:
            self._verbose_id += ' '

    def get_bucket(self, name):
        """
        Returns the :py:class:`bucketly.client.bucket.Bucket` for the
        bucket name given. No request is made.
        """
        return Bucket(self, BucketHandle.for_name(name, self.config.host_base))

    def request(self, request, callback=None, process=None):
        """
        Performs the :py:class:`bucketly.client.models.Request`.

        :param request: The signed request to perform.
        :param callback: If set, the request is performed
            cooperatively and ``callback(result)`` is called once it
            completes; otherwise this blocks until it completes.
        :param process: For cooperative requests, a ``func(result)``
            whose return value becomes the task's result and is what
            the callback receives.
        :returns: The Success or Failure if no callback was given;
            otherwise the started
            :py:class:`bucketly.client.transport.CooperativeRequest`,
            whose ``cancel()`` stops it.
        """
        if callback:
            return CooperativeRequest(
                request, callback, self.scheduler,
                slice_seconds=self.slice_seconds, chunk_size=self.chunk_size,
                verbose=self.verbose, process=process).start()
        return blocking_request(
            request, timeout=self.timeout, verbose=self.verbose)
