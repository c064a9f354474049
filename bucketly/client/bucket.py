"""
Contains the Bucket class offering the operations on one bucket.
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
from xml.etree import ElementTree

from bucketly.client.models import Failure
from bucketly.client.normalizer import Element, normalize_listing
from bucketly.client.request import build_request, list_query, \
    merge_headers


class Bucket(object):
    """
    The operations available on one bucket.

    Obtain instances with
    :py:func:`bucketly.client.client.Client.get_bucket`.

    Every operation returns a :py:class:`bucketly.client.models.Success`
    or :py:class:`bucketly.client.models.Failure`. A Success is
    returned for any HTTP response, including 4xx and 5xx ones, so
    check ``result.ok`` or ``result.response.status``. A Failure means
    no response was obtained at all.

    Every operation also accepts a ``callback``. If given, the
    operation is performed cooperatively: the call returns the started
    :py:class:`bucketly.client.transport.CooperativeRequest` right
    away and ``callback(result)`` is called from a later scheduler
    tick, unless the request is cancelled first.

    :param client: The :py:class:`bucketly.client.client.Client`.
    :param handle: The :py:class:`bucketly.client.models.BucketHandle`.
    """

    def __init__(self, client, handle):
        self.client = client
        self.handle = handle

    def __repr__(self):
        return '<Bucket %s at %s>' % (self.handle.name, self.handle.host)

    @property
    def name(self):
        return self.handle.name

    @property
    def host(self):
        return self.handle.host

    def _request(self, method, key=None, body=None, headers=None, query=''):
        hdrs = {'User-Agent': self.client.user_agent}
        if headers:
            merge_headers(hdrs, headers)
        return build_request(
            self.client.config, self.handle, method, key=key, body=body,
            headers=hdrs, query=query)

    def _perform(self, request, process, callback):
        if callback:
            return self.client.request(request, callback, process=process)
        return process(self.client.request(request))

    def list(self, delimiter=None, prefix=None, max_keys=None, marker=None,
             callback=None):
        """
        GETs the bucket, listing the objects in it.

        On a 2xx response the Success's value is the normalized
        listing, a :py:class:`bucketly.client.normalizer.Map` such as::

            Name            mybucket
            Prefix          users/
            Marker          ABSENT
            MaxKeys         100
            Delimiter       /
            IsTruncated     false
            Contents        Sequence of Maps with Key, LastModified,
                            ETag, Size, StorageClass and Owner
                            (a Map with ID and DisplayName)
            CommonPrefixes  Sequence of Maps with Prefix

        Contents and CommonPrefixes are always sequences when present,
        even with a single entry. For other responses the value is
        None.

        :param delimiter: Keys containing the delimiter after the
            prefix are rolled up into CommonPrefixes.
        :param prefix: Only keys beginning with the prefix are listed.
        :param max_keys: The maximum number of keys to return.
        :param marker: Only keys after the marker are listed.
        :param callback: See the class documentation.
        """
        request = self._request(
            'GET', query=list_query(delimiter, prefix, max_keys, marker))
        return self._perform(request, self._process_listing, callback)

    def _process_listing(self, result):
        if not result.ok:
            return result
        try:
            listing = normalize_listing(
                Element.from_string(result.response.body))
        except ElementTree.ParseError as err:
            return Failure(
                result.request, 'Unable to parse listing: %s' % err)
        return result._replace(value=listing)

    def head(self, key, headers=None, callback=None):
        """
        HEADs the object. The Success's value is the dict of response
        headers (lowercase names), whatever the status.

        :param key: The object key.
        :param headers: Additional headers to send, such as If-Match.
        :param callback: See the class documentation.
        """
        request = self._request('HEAD', key, headers=headers)
        return self._perform(request, self._process_head, callback)

    def _process_head(self, result):
        if result.is_error:
            return result
        return result._replace(value=result.response.headers)

    def get(self, key, headers=None, callback=None):
        """
        GETs the object. On a 2xx response the Success's value is the
        body bytes; otherwise it is None.

        :param key: The object key.
        :param headers: Additional headers to send, such as Range or
            If-None-Match.
        :param callback: See the class documentation.
        """
        request = self._request('GET', key, headers=headers)
        return self._perform(request, self._process_get, callback)

    def _process_get(self, result):
        if not result.ok:
            return result
        return result._replace(value=result.response.body)

    def get_to_file(self, key, path, headers=None, callback=None):
        """
        Like :py:func:`get` but on a 2xx response the body is also
        written to the file at path. A Failure is returned if the file
        cannot be written.

        :param key: The object key.
        :param path: The path of the file to write.
        :param headers: Additional headers to send.
        :param callback: See the class documentation.
        """
        request = self._request('GET', key, headers=headers)

        def process(result):
            result = self._process_get(result)
            if not result.ok:
                return result
            try:
                with open(path, 'wb') as fp:
                    fp.write(result.value)
            except (IOError, OSError) as err:
                return Failure(
                    result.request, 'Unable to write %r: %s' % (path, err))
            return result

        return self._perform(request, process, callback)

    def put(self, key, data, headers=None, callback=None):
        """
        PUTs the data as the object's contents.

        The Content-Length and Content-MD5 are computed from data;
        Content-Type and any x-amz-meta- headers can be given in
        headers.

        :param key: The object key.
        :param data: The bytes (or str, which is UTF-8 encoded) to
            store.
        :param headers: Additional headers to send.
        :param callback: See the class documentation.
        """
        if isinstance(data, str):
            data = data.encode('utf8')
        request = self._request('PUT', key, body=data, headers=headers)
        return self._perform(request, _unchanged, callback)

    def put_from_file(self, key, path, headers=None, callback=None):
        """
        PUTs the contents of the file at path as the object's
        contents. The whole file is read into memory first since its
        length and MD5 digest are needed before the request is sent.
        IOErrors reading the file are raised before any request is
        made.

        :param key: The object key.
        :param path: The path of the file to read.
        :param headers: Additional headers to send.
        :param callback: See the class documentation.
        """
        with open(path, 'rb') as fp:
            data = fp.read()
        return self.put(key, data, headers=headers, callback=callback)

    def delete(self, key, callback=None):
        """
        DELETEs the object.

        :param key: The object key.
        :param callback: See the class documentation.
        """
        request = self._request('DELETE', key)
        return self._perform(request, _unchanged, callback)


def _unchanged(result):
    return result
