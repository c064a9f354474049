"""
Contains the CLIContext class used to pass contextual information to
CLI functions.
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


class CLIContext(object):
    """
    The bag of settings a cli_<name> function works from: the client,
    the streams and whatever options the command set.

    Reading an attribute that was never set gives None (or a no-op
    function for verbose), so functions can test optional settings
    without the caller having to set each one.
    """

    def __getattr__(self, name):
        if name.startswith('__'):
            raise AttributeError(name)
        if name == 'verbose':
            return lambda *a, **k: None
        return None

    def __repr__(self):
        result = super(CLIContext, self).__repr__()
        for item in sorted(self.__dict__):
            if item[0] != '_':
                result += '\n    %s = %s' % (item, getattr(self, item))
        return result

    def copy(self):
        """
        Returns a new CLIContext instance that is a shallow copy of
        the original, much like dict's copy method.
        """
        context = CLIContext()
        context.__dict__.update(self.__dict__)
        return context

    def write_headers(self, fp, headers, mute=None):
        """
        Writes the dict of response headers to fp as aligned
        ``Name: value`` lines sorted by name, skipping any names in
        mute. A header received more than once gets a line per value.
        """
        mute = mute or ()
        names = [k for k in sorted(headers or {}) if k not in mute]
        if not names:
            return
        fmt = '%%-%ds %%s\n' % (max(len(k) for k in names) + 1)
        for name in names:
            values = headers[name]
            if not isinstance(values, list):
                values = [values]
            for value in values:
                fp.write(fmt % (name.title() + ':', value))
        fp.flush()
