"""
Contains the command line interface to object storage.

Each command lives in its own module as a
:py:class:`bucketly.cli.command.CLICommand` subclass with a
``cli_<name>`` function doing the work, so the functions can be
reused from Python code given a suitable
:py:class:`bucketly.cli.context.CLIContext`.

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
# flake8: noqa
from bucketly.cli.cli import CLI, COMMANDS, main
