"""
Contains a CLICommand that can issue GET requests for objects.

Uses the following from :py:class:`bucketly.cli.context.CLIContext`:

==============  =====================================================
client          The :py:class:`bucketly.client.client.Client`.
cooperative     True if the request should run through the scheduler.
headers         A dict of headers to send.
ignore_404      True if 404s should be silently ignored.
output          The path to write the object to; None for stdout.
output_headers  True if the response headers should be written
                before the contents.
stdout          Where the contents (and headers) are written.
==============  =====================================================
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
from bucketly.cli.command import CLICommand, check_result, perform, \
    split_path


def cli_get(context, path):
    """
    GETs the object, writing its contents to context.output or, if
    that is not set, to standard output.

    See :py:mod:`bucketly.cli.get` for context usage information.

    See :py:class:`CLIGet` for more information.
    """
    bucket_name, key = split_path(path)
    bucket = context.client.get_bucket(bucket_name)
    if context.output:
        result = perform(
            context, bucket.get_to_file, key, context.output,
            headers=context.headers)
    else:
        result = perform(context, bucket.get, key, headers=context.headers)
    if not check_result(
            result, 'getting object %r' % path,
            ignore_404=context.ignore_404):
        return
    if context.output_headers:
        context.write_headers(
            context.stdout, result.response.headers,
            context.muted_object_headers)
    if not context.output:
        out = getattr(context.stdout, 'buffer', None)
        if out is None:
            # Text only stream, such as a StringIO.
            context.stdout.write(result.value.decode('utf8', 'replace'))
            context.stdout.flush()
        else:
            context.stdout.flush()
            out.write(result.value)
            out.flush()


class CLIGet(CLICommand):
    """
    A CLICommand that can issue GET requests for objects.

    See the output of ``bucketly get --help`` for more information.
    """

    def __init__(self, cli):
        super(CLIGet, self).__init__(
            cli, 'get', min_args=1, max_args=1, usage="""
Usage: %prog [main_options] get [options] <bucket/key>

For help on [main_options] run %prog with no args.

Outputs the contents of the object given.""".strip())
        self.option_parser.add_option(
            '--headers', dest='headers', action='store_true',
            help='Output headers as well as the contents.')
        self.option_parser.add_option(
            '-h', '-H', '--header', dest='header', action='append',
            metavar='HEADER:VALUE',
            help='Add a header to the request. This can be used multiple '
                 'times for multiple headers. Examples: '
                 '-hif-match:6f432df40167a4af05ca593acc6b3e4c -h '
                 '"If-Modified-Since: Wed, 23 Nov 2011 20:03:38 GMT"')
        self.option_parser.add_option(
            '-o', '--output', dest='output', metavar='PATH',
            help='Indicates where to write the contents; default is '
                 'standard output.')
        self.option_parser.add_option(
            '--ignore-404', dest='ignore_404', action='store_true',
            help='Ignores 404 Not Found responses. Nothing will be output, '
                 'but the exit code will be 0 instead of 1.')

    def __call__(self, args):
        options, args, context = self.parse_args_and_create_context(args)
        context.output = options.output
        context.output_headers = options.headers
        context.headers = self.options_list_to_dict(options.header)
        context.ignore_404 = options.ignore_404
        return cli_get(context, args[0])
