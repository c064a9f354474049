"""
Contains a CLICommand that can issue PUT requests for objects.

Uses the following from :py:class:`bucketly.cli.context.CLIContext`:

===========  ========================================================
client       The :py:class:`bucketly.client.client.Client`.
cooperative  True if the request should run through the scheduler.
headers      A dict of headers to send.
input_       The path of the file to upload; None for stdin.
stdin        Where the contents are read from when input_ is None.
===========  ========================================================
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
from bucketly.cli.command import CLICommand, ReturnCode, check_result, \
    perform, split_path


def cli_put(context, path):
    """
    PUTs the object from context.input_ or, if that is not set, from
    standard input.

    See :py:mod:`bucketly.cli.put` for context usage information.

    See :py:class:`CLIPut` for more information.
    """
    bucket_name, key = split_path(path)
    bucket = context.client.get_bucket(bucket_name)
    if context.input_:
        try:
            result = perform(
                context, bucket.put_from_file, key, context.input_,
                headers=context.headers)
        except (IOError, OSError) as err:
            raise ReturnCode('reading %r: %s' % (context.input_, err))
    else:
        stdin = getattr(context.stdin, 'buffer', context.stdin)
        result = perform(
            context, bucket.put, key, stdin.read(), headers=context.headers)
    check_result(result, 'putting object %r' % path)


class CLIPut(CLICommand):
    """
    A CLICommand that can issue PUT requests for objects.

    See the output of ``bucketly put --help`` for more information.
    """

    def __init__(self, cli):
        super(CLIPut, self).__init__(
            cli, 'put', min_args=1, max_args=1, usage="""
Usage: %prog [main_options] put [options] <bucket/key>

For help on [main_options] run %prog with no args.

Stores the contents of standard input, or of the --input file, as the
object given. The whole input is read before sending since its length and
MD5 digest are sent with the request.""".strip())
        self.option_parser.add_option(
            '-h', '-H', '--header', dest='header', action='append',
            metavar='HEADER:VALUE',
            help='Add a header to the request. This can be used multiple '
                 'times for multiple headers. Examples: '
                 '-hcontent-type:text/plain -h "x-amz-meta-color: blue"')
        self.option_parser.add_option(
            '-i', '--input', dest='input_', metavar='PATH',
            help='Indicates where to read the contents from; default is '
                 'standard input.')

    def __call__(self, args):
        options, args, context = self.parse_args_and_create_context(args)
        context.headers = self.options_list_to_dict(options.header)
        context.input_ = options.input_
        return cli_put(context, args[0])
