"""
Contains a CLICommand that lists the objects in a bucket.

Uses the following from :py:class:`bucketly.cli.context.CLIContext`:

===========  ========================================================
client       The :py:class:`bucketly.client.client.Client` to use.
cooperative  True if the request should run through the scheduler.
full         True to output size, last modified and etag per object.
raw          True to output the whole normalized listing as JSON.
stdout       Where the listing is written.
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
import json

from bucketly.cli.command import CLICommand, ReturnCode, check_result, \
    perform, split_path


def cli_list(context, bucket_name, delimiter=None, prefix=None,
             max_keys=None, marker=None):
    """
    Lists the objects in the bucket.

    See :py:mod:`bucketly.cli.listing` for context usage information.

    See :py:class:`CLIList` for more information.
    """
    bucket = context.client.get_bucket(bucket_name)
    result = perform(
        context, bucket.list, delimiter=delimiter, prefix=prefix,
        max_keys=max_keys, marker=marker)
    check_result(result, 'listing bucket %r' % bucket_name)
    listing = result.value
    fp = context.stdout
    if context.raw:
        fp.write(json.dumps(listing.to_python(), indent=4, sort_keys=True))
        fp.write('\n')
        fp.flush()
        return
    for entry in listing.get('CommonPrefixes') or []:
        fp.write('%s\n' % entry.get('Prefix'))
    for entry in listing.get('Contents') or []:
        if context.full:
            fp.write('%13s %s %s %s\n' % (
                entry.get('Size'), entry.get('LastModified'),
                entry.get('ETag'), entry.get('Key')))
        else:
            fp.write('%s\n' % entry.get('Key'))
    fp.flush()


class CLIList(CLICommand):
    """
    A CLICommand that can list the objects in a bucket.

    See the output of ``bucketly list --help`` for more information.
    """

    def __init__(self, cli):
        super(CLIList, self).__init__(
            cli, 'list', min_args=1, max_args=1, usage="""
Usage: %prog [main_options] list [options] <bucket>

For help on [main_options] run %prog with no args.

Outputs the keys of the objects in the <bucket>, preceded by any common
prefixes if a --delimiter is given.""".strip())
        self.option_parser.add_option(
            '-d', '--delimiter', dest='delimiter',
            help='Keys containing the DELIMITER after the prefix are '
                 'rolled up and output once as a common prefix.')
        self.option_parser.add_option(
            '-p', '--prefix', dest='prefix',
            help='Only keys beginning with the PREFIX are listed.')
        self.option_parser.add_option(
            '-l', '--limit', dest='limit', metavar='INTEGER',
            help='The maximum number of keys to list.')
        self.option_parser.add_option(
            '-m', '--marker', dest='marker',
            help='Only keys after the MARKER are listed (note: the marker '
                 'does not have to actually exist).')
        self.option_parser.add_option(
            '-f', '--full', dest='full', action='store_true',
            help='Outputs the size, last modified time and etag of each '
                 'object before its key.')
        self.option_parser.add_option(
            '-r', '--raw', dest='raw', action='store_true',
            help='Outputs the whole listing as JSON.')

    def __call__(self, args):
        options, args, context = self.parse_args_and_create_context(args)
        context.full = options.full
        context.raw = options.raw
        max_keys = None
        if options.limit:
            try:
                max_keys = int(options.limit)
            except ValueError:
                raise ReturnCode(
                    'invalid --limit %r; an integer is required.' %
                    options.limit)
        bucket_name, _ = split_path(args[0], require_key=False)
        return cli_list(
            context, bucket_name, delimiter=options.delimiter,
            prefix=options.prefix, max_keys=max_keys, marker=options.marker)
