"""
Contains tools for connecting to object storage services.

For convenience, the following names are imported from submodules:

=================  ========================================================
Client             :py:class:`bucketly.client.client.Client`
Bucket             :py:class:`bucketly.client.bucket.Bucket`
ClientConfig       :py:class:`bucketly.client.models.ClientConfig`
Success            :py:class:`bucketly.client.models.Success`
Failure            :py:class:`bucketly.client.models.Failure`
Scheduler          :py:class:`bucketly.client.scheduler.Scheduler`
=================  ========================================================

Example::

    from bucketly.client import Client, ClientConfig

    client = Client(ClientConfig('access_key', 'secret_key'))
    bucket = client.get_bucket('mybucket')

    result = bucket.put('path/object.txt', b'object contents')
    if result.ok:
        print(bucket.get('path/object.txt').value)

    def on_listed(result):
        for entry in result.value['Contents']:
            print(entry['Key'])

    task = bucket.list(prefix='path/', callback=on_listed)
    while not task.done:
        client.scheduler.tick()

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
from bucketly.client.bucket import Bucket
from bucketly.client.client import Client
from bucketly.client.models import ClientConfig, Failure, Success
from bucketly.client.scheduler import Scheduler
