"""
Contains a CLICommand that can issue HEAD requests.

Uses the following from :py:class:`bucketly.cli.context.CLIContext`:

====================  ===============================================
client                The :py:class:`bucketly.client.client.Client`.
cooperative           True if the request should run through the
                      scheduler.
headers               A dict of headers to send.
ignore_404            True if 404s should be silently ignored.
muted_object_headers  The headers to omit when outputting the
                      response headers.
stdout                Where the headers are written.
write_headers         A function used to output the response
                      headers.
====================  ===============================================
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


def cli_head(context, path):
    """
    Performs a HEAD on the object.

    See :py:mod:`bucketly.cli.head` for context usage information.

    See :py:class:`CLIHead` for more information.
    """
    bucket_name, key = split_path(path)
    bucket = context.client.get_bucket(bucket_name)
    result = perform(context, bucket.head, key, headers=context.headers)
    if check_result(
            result, 'heading object %r' % path,
            ignore_404=context.ignore_404):
        context.write_headers(
            context.stdout, result.value, context.muted_object_headers)


class CLIHead(CLICommand):
    """
    A CLICommand that can issue HEAD requests.

    See the output of ``bucketly head --help`` for more information.
    """

    def __init__(self, cli):
        super(CLIHead, self).__init__(
            cli, 'head', min_args=1, max_args=1, usage="""
Usage: %prog [main_options] head [options] <bucket/key>

For help on [main_options] run %prog with no args.

Outputs the resulting headers from a HEAD request of the object
given.""".strip())
        self.option_parser.add_option(
            '-h', '-H', '--header', dest='header', action='append',
            metavar='HEADER:VALUE',
            help='Add a header to the request. This can be used multiple '
                 'times for multiple headers. Examples: '
                 '-hif-match:6f432df40167a4af05ca593acc6b3e4c -h '
                 '"If-Modified-Since: Wed, 23 Nov 2011 20:03:38 GMT"')
        self.option_parser.add_option(
            '--ignore-404', dest='ignore_404', action='store_true',
            help='Ignores 404 Not Found responses. Nothing will be output, '
                 'but the exit code will be 0 instead of 1.')

    def __call__(self, args):
        options, args, context = self.parse_args_and_create_context(args)
        context.headers = self.options_list_to_dict(options.header)
        context.ignore_404 = options.ignore_404
        return cli_head(context, args[0])
