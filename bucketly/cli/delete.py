"""
Contains a CLICommand that can issue DELETE requests for objects.

Uses the following from :py:class:`bucketly.cli.context.CLIContext`:

===========  ========================================================
client       The :py:class:`bucketly.client.client.Client`.
cooperative  True if the request should run through the scheduler.
ignore_404   True if 404s should be silently ignored.
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
from bucketly.cli.command import CLICommand, check_result, perform, \
    split_path


def cli_delete(context, path):
    """
    Deletes the object.

    See :py:mod:`bucketly.cli.delete` for context usage information.

    See :py:class:`CLIDelete` for more information.
    """
    bucket_name, key = split_path(path)
    bucket = context.client.get_bucket(bucket_name)
    result = perform(context, bucket.delete, key)
    check_result(
        result, 'deleting object %r' % path, ignore_404=context.ignore_404)


class CLIDelete(CLICommand):
    """
    A CLICommand that can issue DELETE requests for objects.

    See the output of ``bucketly delete --help`` for more information.
    """

    def __init__(self, cli):
        super(CLIDelete, self).__init__(
            cli, 'delete', min_args=1, max_args=1, usage="""
Usage: %prog [main_options] delete [options] <bucket/key>

For help on [main_options] run %prog with no args.

Deletes the object given.""".strip())
        self.option_parser.add_option(
            '--ignore-404', dest='ignore_404', action='store_true',
            help='Ignores 404 Not Found responses; the exit code will be 0 '
                 'instead of 1.')

    def __call__(self, args):
        options, args, context = self.parse_args_and_create_context(args)
        context.ignore_404 = options.ignore_404
        return cli_delete(context, args[0])
