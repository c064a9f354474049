#!/usr/bin/python
# Copyright 2011-2013 Gregory Holt
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from setuptools import setup

import bucketly


setup(
    name='bucketly', version=bucketly.VERSION,
    description='Client for S3 style object storage',
    author='Gregory Holt',
    packages=[
        'bucketly', 'bucketly.cli', 'bucketly.client', 'bucketly.test',
        'bucketly.test.functional', 'bucketly.test.unit'],
    python_requires='>=3.8',
    install_requires=['eventlet'],
    extras_require={'test': ['pytest']},
    entry_points={'console_scripts': ['bucketly = bucketly.cli:main']})
