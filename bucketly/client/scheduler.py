"""
Contains the Scheduler that shares a host's periodic tick among
any number of cooperative tasks.
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
import itertools


class Scheduler(object):
    """
    Keeps the step functions of in-flight tasks and calls each one
    once per :py:func:`tick`.

    The host is expected to call :py:func:`tick` from its periodic
    callback (a frame loop, a timer, or
    :py:class:`bucketly.concurrency.GreenTicker`). Nothing here runs
    on its own; all progress happens inside tick calls on the
    caller's thread.
    """

    def __init__(self):
        self._hooks = {}
        self._ids = itertools.count(1)

    def register(self, step):
        """
        Adds the step function to be called on each tick and returns
        a handle for :py:func:`unregister`.
        """
        handle = next(self._ids)
        self._hooks[handle] = step
        return handle

    def unregister(self, handle):
        """
        Removes the step function registered under handle; it will
        not be called again, even later in the tick currently being
        run. Unknown or already removed handles are ignored.
        """
        self._hooks.pop(handle, None)

    @property
    def pending(self):
        """The number of step functions currently registered."""
        return len(self._hooks)

    def tick(self):
        """
        Calls each registered step function once, in registration
        order. Functions may register or unregister hooks (their own
        included) while being called; newly registered hooks first
        run on the next tick.
        """
        for handle in list(self._hooks):
            step = self._hooks.get(handle)
            if step is not None:
                step()
