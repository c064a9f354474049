"""
Contains an extended optparse.OptionParser that does not exit on
errors and writes to the streams it is given.
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
import optparse
import sys


class OptionParser(optparse.OptionParser, object):
    """
    Extended optparse.OptionParser that supports stdout and stderr
    streams, raw_epilog output, and an error prefix. It also does not
    exit automatically on error and instead sets an instance bool of
    error_encountered.
    """

    def __init__(self, usage=None, option_list=None,
                 option_class=optparse.Option, version=None,
                 conflict_handler='error', description=None, formatter=None,
                 add_help_option=True, prog=None, epilog=None,
                 stdout=None, stderr=None, raw_epilog='', error_prefix=''):
        super(OptionParser, self).__init__(
            usage, option_list, option_class, version, conflict_handler,
            description, formatter, False, prog, epilog)
        if add_help_option:
            self.add_option(
                '-?', '--help', dest='help', action='store_true',
                help='Shows this help text.')
        if version:
            self.remove_option('--version')
            self.add_option(
                '--version', dest='version', action='store_true',
                help='Shows the version of this tool.')
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        #: Output just after the standard print_help output, in it's raw form.
        #: This is different than epilog in that epilog is reformatted.
        self.raw_epilog = raw_epilog
        #: Output just before any error. This can be useful in identification
        #: when multiple parsers are in use.
        self.error_prefix = error_prefix
        #: True if an error was encountered while parsing.
        self.error_encountered = False

    def error(self, msg, file=None):
        """
        Outputs the error msg to the file if specified, or to the
        stderr stream.
        """
        file = file or self.stderr
        self.error_encountered = True
        file.write(self.error_prefix)
        file.write(msg)
        file.write('\n')
        file.flush()

    def print_help(self, file=None):
        """
        Outputs help information to the file if specified, or to the
        stdout stream.
        """
        file = file or self.stdout
        optparse.OptionParser.print_help(self, file)
        if self.raw_epilog:
            file.write(self.raw_epilog)
        file.flush()

    def print_usage(self, file=None):
        file = file or self.stdout
        optparse.OptionParser.print_usage(self, file)
        file.flush()

    def print_version(self, file=None):
        file = file or self.stdout
        optparse.OptionParser.print_version(self, file)
        file.flush()
