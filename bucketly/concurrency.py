"""
Concurrency API for Bucketly.

Copyright 2011 Gregory Holt

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

__all__ = ['GreenTicker']

import eventlet


#: Seconds between ticks; about one frame at 30 frames per second.
DEFAULT_INTERVAL = 1.0 / 30


class GreenTicker(object):
    """
    A periodic tick source for hosts that have none of their own.
    Calls the scheduler's tick from an Eventlet green thread every
    interval seconds, so cooperative requests progress whenever the
    calling code yields to Eventlet (eventlet.sleep and the like).

    :param scheduler: The :py:class:`bucketly.client.scheduler.Scheduler`
        to tick.
    :param interval: Seconds between ticks. Default: 1/30
    """

    def __init__(self, scheduler, interval=DEFAULT_INTERVAL):
        self.scheduler = scheduler
        self.interval = interval
        #: The number of ticks performed so far.
        self.ticks = 0
        self._thread = None

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc_value, traceback):
        self.stop()

    @property
    def running(self):
        return self._thread is not None and not self._thread.dead

    def _run(self):
        while True:
            self.scheduler.tick()
            self.ticks += 1
            eventlet.sleep(self.interval)

    def start(self):
        """
        Begins ticking in a new green thread, if not already doing
        so. Returns self.
        """
        if not self.running:
            self._thread = eventlet.spawn(self._run)
        return self

    def stop(self):
        """
        Stops ticking. Registered tasks stay registered and resume on
        the next start.
        """
        if self._thread is not None:
            self._thread.kill()
            self._thread = None

    def wait_for(self, task):
        """
        Starts ticking if needed and sleeps cooperatively until the
        task has completed or been cancelled; returns its result
        (None if cancelled). If a tick raised an exception, stopping
        the ticker, that exception is raised here.
        """
        self.start()
        while not task.done:
            if self._thread.dead:
                self._thread.wait()
                self._thread = None
                self.start()
            eventlet.sleep(self.interval)
        return task.result
