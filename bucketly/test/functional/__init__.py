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
import unittest

from bucketly.client.models import DEFAULT_HOST_BASE, ClientConfig


BUCKET = os.environ.get('BUCKETLY_TEST_BUCKET', '')
ACCESS_KEY = os.environ.get('BUCKETLY_ACCESS_KEY', '')
SECRET_KEY = os.environ.get('BUCKETLY_SECRET_KEY', '')
HOST_BASE = os.environ.get('BUCKETLY_HOST_BASE', DEFAULT_HOST_BASE)
PROXY = os.environ.get('BUCKETLY_PROXY', '')


def config():
    """
    Returns the ClientConfig for the live service, raising
    unittest.SkipTest if the environment does not name a bucket and
    credentials to test against.
    """
    if not (BUCKET and ACCESS_KEY and SECRET_KEY):
        raise unittest.SkipTest(
            'Set BUCKETLY_TEST_BUCKET, BUCKETLY_ACCESS_KEY and '
            'BUCKETLY_SECRET_KEY to run the functional tests.')
    return ClientConfig(
        ACCESS_KEY, SECRET_KEY, proxy=PROXY, host_base=HOST_BASE)
