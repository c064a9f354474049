"""
Contains the CLI class that handles the ``bucketly`` command line.
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
import os
import sys
import textwrap

from bucketly import VERSION
from bucketly.cli.command import ReturnCode
from bucketly.cli.context import CLIContext
from bucketly.cli.delete import CLIDelete
from bucketly.cli.get import CLIGet
from bucketly.cli.head import CLIHead
from bucketly.cli.listing import CLIList
from bucketly.cli.optionparser import OptionParser
from bucketly.cli.put import CLIPut
from bucketly.client.client import Client
from bucketly.client.models import ClientConfig, DEFAULT_HOST_BASE


#: The command classes available from the command line.
COMMANDS = [CLIDelete, CLIGet, CLIHead, CLIList, CLIPut]


class CLI(object):
    """
    An instance of a command line interface client to object storage.
    Calling the instance with the command line arguments executes
    them and returns the exit code. No args will output help
    information.

    :param stdin: The file-like-object to read input from.
    :param stdout: The file-like-object to send output to.
    :param stderr: The file-like-object to send error output to.
    :param environ: The dict of environment variables to take option
        defaults from; default os.environ.
    """

    def __init__(self, stdin=None, stdout=None, stderr=None, environ=None):
        environ = os.environ if environ is None else environ
        self.context = CLIContext()
        self.context.stdin = stdin or sys.stdin
        self.context.stdout = stdout or sys.stdout
        self.context.stderr = stderr or sys.stderr
        self.commands = {}
        for command_class in COMMANDS:
            command = command_class(self)
            self.commands[command.name] = command
        self.option_parser = OptionParser(
            version='%prog ' + VERSION, usage="""
Usage: %prog [options] <command> [command_options] [args]

Paths are given as <bucket> or <bucket>/<key>.""".strip(),
            stdout=self.context.stdout, stderr=self.context.stderr)
        self.option_parser.add_option(
            '-A', '--access-key', dest='access_key',
            default=environ.get('BUCKETLY_ACCESS_KEY', ''), metavar='KEY',
            help='Access key id to sign requests with. You can also set '
                 'this with the environment variable BUCKETLY_ACCESS_KEY.')
        self.option_parser.add_option(
            '-K', '--secret-key', dest='secret_key',
            default=environ.get('BUCKETLY_SECRET_KEY', ''), metavar='KEY',
            help='Secret key to sign requests with. You can also set this '
                 'with the environment variable BUCKETLY_SECRET_KEY.')
        self.option_parser.add_option(
            '-P', '--proxy', dest='proxy',
            default=environ.get('BUCKETLY_PROXY', ''), metavar='URL',
            help='Sends all requests through the given HTTP proxy URL. You '
                 'can also set this with the environment variable '
                 'BUCKETLY_PROXY.')
        self.option_parser.add_option(
            '-H', '--host-base', dest='host_base',
            default=environ.get('BUCKETLY_HOST_BASE', DEFAULT_HOST_BASE),
            metavar='HOST',
            help='The host name bucket host names are formed under. '
                 'Default: %s You can also set this with the environment '
                 'variable BUCKETLY_HOST_BASE.' % DEFAULT_HOST_BASE)
        self.option_parser.add_option(
            '--cooperative', dest='cooperative', action='store_true',
            default=(
                environ.get('BUCKETLY_COOPERATIVE', 'false').lower() ==
                'true'),
            help='Performs requests a slice at a time from a periodic tick '
                 'instead of blocking. You can also set this with the '
                 'environment variable BUCKETLY_COOPERATIVE (set to "true" '
                 'or "false").')
        self.option_parser.add_option(
            '-v', '--verbose', dest='verbose', action='store_true',
            help='Causes output to standard error indicating actions being '
                 'taken.')
        self.option_parser.raw_epilog = self._commands_epilog()

    def _commands_epilog(self):
        epilog = 'Commands:\n'
        for name in sorted(self.commands):
            lines = self.commands[name].option_parser.get_usage().split('\n')
            main_line = '  ' + lines[0].split(']', 1)[1].strip()
            lines = [line for line in lines[4:] if line]
            if len(main_line) < 24:
                initial_indent = main_line + ' ' * (24 - len(main_line))
            else:
                epilog += main_line + '\n'
                initial_indent = ' ' * 24
            epilog += textwrap.fill(
                ' '.join(lines), width=79, initial_indent=initial_indent,
                subsequent_indent=' ' * 24) + '\n'
        return epilog

    def _verbose(self, msg, *args):
        self.context.stderr.write('VERBOSE ' + (msg % args) + '\n')
        self.context.stderr.flush()

    def __call__(self, args):
        """
        Processes the command line args given, returning the exit
        code.
        """
        self.option_parser.disable_interspersed_args()
        options, args = self.option_parser.parse_args(args)
        self.option_parser.enable_interspersed_args()
        if self.option_parser.error_encountered:
            return 1
        if options.version:
            self.option_parser.print_version()
            return 0
        if not args or options.help:
            self.option_parser.print_help()
            return 1
        command = self.commands.get(args[0])
        if not command:
            self.option_parser.print_help()
            return 1
        self.context.cooperative = options.cooperative
        self.context.client = Client(
            ClientConfig(
                options.access_key, options.secret_key, proxy=options.proxy,
                host_base=options.host_base),
            verbose=self._verbose if options.verbose else None)
        try:
            command(args[1:])
        except ReturnCode as err:
            if err.text:
                self.context.stderr.write(
                    '%s command: %s\n' % (command.name, err.text))
                self.context.stderr.flush()
            return err.code
        return 0


def main():
    """
    The entry point of the ``bucketly`` console script.
    """
    sys.exit(CLI()(sys.argv[1:]))
