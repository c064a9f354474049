"""
Contains the CLICommand class that can be subclassed to create new
Bucketly commands.
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
from bucketly.cli.optionparser import OptionParser
from bucketly.concurrency import GreenTicker


class ReturnCode(Exception):
    """
    Raise this to indicate the desire to exit.

    :param text: The text to report as the reason for exiting.
        Default: None
    :param code: The return code to give back to the shell.
        Default: 1
    """

    def __init__(self, text=None, code=1):
        Exception.__init__(self, text)
        self.text = text
        self.code = code


def split_path(path, require_key=True):
    """
    Splits a ``bucket/key`` path into (bucket, key); key is None if
    the path names only a bucket. Raises ReturnCode if require_key
    is set and there is no key.
    """
    path = (path or '').lstrip('/')
    if '/' in path:
        bucket, key = path.split('/', 1)
    else:
        bucket, key = path, None
    if not bucket:
        raise ReturnCode('a bucket name is required.')
    if require_key and not key:
        raise ReturnCode('a path of the form bucket/key is required.')
    return bucket, key


def perform(context, operation, *args, **kwargs):
    """
    Calls the bucket operation given, blocking; or, if
    context.cooperative is set, through the client's scheduler ticked
    by a :py:class:`bucketly.concurrency.GreenTicker`. Returns the
    operation's result either way.
    """
    if not context.cooperative:
        return operation(*args, **kwargs)
    results = []
    task = operation(*args, callback=results.append, **kwargs)
    with GreenTicker(context.client.scheduler) as ticker:
        ticker.wait_for(task)
    return results[0]


def check_result(result, description, ignore_404=False):
    """
    Raises ReturnCode if the result is a Failure or carries a non-2xx
    status. Returns False if it was a 404 being ignored, True
    otherwise.
    """
    if result.is_error:
        raise ReturnCode('%s: %s' % (description, result.message))
    status = result.response.status
    if status // 100 != 2:
        if status == 404 and ignore_404:
            return False
        raise ReturnCode('%s: %s %s' % (
            description, status, result.response.reason))
    return True


class CLICommand(object):
    """
    Subclass this to create new Bucketly commands.

    Don't forget to add your new class to
    :py:attr:`bucketly.cli.cli.COMMANDS`.

    Your subclass will be created by :py:class:`bucketly.cli.cli.CLI`
    with the CLI instance as the only parameter. You should then call
    this superclass with that CLI instance, your command's name, and
    any other options desired.

    :param cli: The :py:class:`bucketly.cli.cli.CLI` instance.
    :param name: The name of the command.
    :param min_args: The minimum number of arguments required.
    :param max_args: The maximum number of arguments allowed.
    :param usage: The usage string for
        :py:class:`OptionParser`.
    """

    def __init__(self, cli, name, min_args=None, max_args=None, usage=None):
        self.cli = cli
        self.name = name
        self.min_args = min_args
        self.max_args = max_args
        if usage is None:
            usage = """
Usage: %%prog [main_options] %s

For help on [main_options] run %%prog with no args.

Executes the %s command.""".strip() % (name, name)
        self.option_parser = OptionParser(
            usage=usage, stdout=self.cli.context.stdout,
            stderr=self.cli.context.stderr,
            error_prefix=name + ' command: ')

    def parse_args_and_create_context(self, args):
        """
        Helper method that will parse the args into options and
        remaining args as well as create an initial
        :py:class:`bucketly.cli.context.CLIContext`.

        The new context will be a copy of
        :py:attr:`bucketly.cli.cli.CLI.context` with the following
        attribute added:

        =====================  =====================================
        muted_object_headers   The headers to omit when outputting
                               object headers.
        =====================  =====================================

        :returns: options, args, context
        """
        original_args = args
        options, args = self.option_parser.parse_args(args)
        if self.option_parser.error_encountered:
            if '-?' in original_args or '--help' in original_args:
                self.option_parser.print_help()
            raise ReturnCode()
        if options.help:
            self.option_parser.print_help()
            raise ReturnCode()
        if self.min_args is not None and len(args) < self.min_args:
            raise ReturnCode(
                'requires at least %s args.' % self.min_args)
        if self.max_args is not None and len(args) > self.max_args:
            raise ReturnCode(
                'requires no more than %s args.' % self.max_args)
        context = self.cli.context.copy()
        context.muted_object_headers = ['accept-ranges', 'date']
        return options, args, context

    def options_list_to_dict(self, options_list):
        """
        Helper function that will convert an options list into a dict
        of key/values.

        This is used for the quite common -hheader:value command line
        options, like this::

            context.headers = self.options_list_to_dict(options.header)

        Header names keep their case since x-amz- values are signed
        exactly as given.
        """
        result = {}
        if options_list:
            for key in options_list:
                key = key.lstrip()
                colon = key.find(':')
                if colon < 1:
                    colon = None
                equal = key.find('=')
                if equal < 1:
                    equal = None
                if colon and (not equal or colon < equal):
                    key, value = key.split(':', 1)
                elif equal:
                    key, value = key.split('=', 1)
                else:
                    value = ''
                result[key] = value.lstrip()
        return result
