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
import unittest
from xml.etree import ElementTree

from bucketly.client.normalizer import ABSENT, Element, Map, Scalar, \
    Sequence, normalize, normalize_listing


NS = 'http://s3.amazonaws.com/doc/2006-03-01/'

ONE_KEY_LISTING = ('''<?xml version="1.0" encoding="UTF-8"?>
<ListBucketResult xmlns="%s">
  <Name>bucket</Name>
  <Prefix/>
  <Marker/>
  <MaxKeys>1000</MaxKeys>
  <IsTruncated>false</IsTruncated>
  <Contents>
    <Key>my-image.jpg</Key>
    <LastModified>2009-10-12T17:50:30.000Z</LastModified>
    <ETag>&quot;fba9dede5f27731c9771645a39863328&quot;</ETag>
    <Size>434234</Size>
    <StorageClass>STANDARD</StorageClass>
    <Owner>
      <ID>75aa57f09aa0c8caeab4f8c24e99d10f8e7faeebf76c078efc7c6caea54ba06a</ID>
      <DisplayName>mtd@amazon.com</DisplayName>
    </Owner>
  </Contents>
</ListBucketResult>''' % NS).encode('utf8')

ROLLED_UP_LISTING = ('''<?xml version="1.0" encoding="UTF-8"?>
<ListBucketResult xmlns="%s">
  <Name>example-bucket</Name>
  <Prefix>photos/2006/</Prefix>
  <Marker></Marker>
  <MaxKeys>1000</MaxKeys>
  <Delimiter>/</Delimiter>
  <IsTruncated>false</IsTruncated>
  <CommonPrefixes>
    <Prefix>photos/2006/feb/</Prefix>
  </CommonPrefixes>
  <CommonPrefixes>
    <Prefix>photos/2006/jan/</Prefix>
  </CommonPrefixes>
</ListBucketResult>''' % NS).encode('utf8')


def parse(text):
    return Element.from_string(text)


class TestElement(unittest.TestCase):

    def test_namespace_dropped_from_names(self):
        element = parse(ONE_KEY_LISTING)
        self.assertEqual(element.name, 'ListBucketResult')
        self.assertEqual(element.attributes, {'xmlns': NS})
        self.assertEqual(
            [c.name for c in element.children],
            ['Name', 'Prefix', 'Marker', 'MaxKeys', 'IsTruncated',
             'Contents'])
        self.assertEqual(element.children[1].attributes, {})

    def test_changed_namespace_kept(self):
        element = parse(b'<a xmlns="x"><b xmlns="y">t</b><c>u</c></a>')
        self.assertEqual(element.children[0].attributes, {'xmlns': 'y'})
        self.assertEqual(element.children[1].attributes, {})

    def test_malformed(self):
        self.assertRaises(
            ElementTree.ParseError, parse, b'<ListBucketResult><Contents>')


class TestNormalize(unittest.TestCase):

    def test_empty_element_absent(self):
        self.assertTrue(normalize(parse(b'<Marker/>')) is ABSENT)
        self.assertTrue(normalize(parse(b'<Marker></Marker>')) is ABSENT)
        self.assertTrue(normalize(parse(b'<Marker>\n  </Marker>')) is ABSENT)

    def test_absent(self):
        self.assertFalse(ABSENT)
        self.assertEqual(ABSENT.to_python(), None)
        self.assertEqual(repr(ABSENT), 'ABSENT')

    def test_text_only_scalar(self):
        value = normalize(parse(b'<Key>my-image.jpg</Key>'))
        self.assertTrue(isinstance(value, Scalar))
        self.assertEqual(value, 'my-image.jpg')
        self.assertEqual(str(value), 'my-image.jpg')
        self.assertEqual(value.to_python(), 'my-image.jpg')

    def test_children_map(self):
        value = normalize(parse(
            b'<Owner><ID>a1</ID><DisplayName>me</DisplayName></Owner>'))
        self.assertEqual(
            value, Map({'ID': Scalar('a1'), 'DisplayName': Scalar('me')}))
        self.assertEqual(value['ID'], 'a1')
        self.assertEqual(value.get('Nope'), None)
        self.assertEqual(sorted(value), ['DisplayName', 'ID'])

    def test_attributes_and_text(self):
        value = normalize(parse(b'<Grantee type="User">bob</Grantee>'))
        self.assertEqual(
            value, Map({'type': Scalar('User'), 'value': Scalar('bob')}))

    def test_whitespace_text_ignored(self):
        value = normalize(parse(b'<r>\n  <a>1</a>\n</r>'))
        self.assertEqual(value, Map({'a': Scalar('1')}))

    def test_repeated_names_become_sequence(self):
        value = normalize(parse(b'<r><a>1</a><b>x</b><a>2</a><a>3</a></r>'))
        self.assertEqual(value['b'], 'x')
        self.assertTrue(isinstance(value['a'], Sequence))
        self.assertEqual(
            value['a'], Sequence([Scalar('1'), Scalar('2'), Scalar('3')]))

    def test_repeated_maps(self):
        value = normalize(parse(
            b'<r><e><k>1</k></e><e><k>2</k></e></r>'))
        self.assertEqual(value.to_python(), {'e': [{'k': '1'}, {'k': '2'}]})

    def test_repeated_absent(self):
        value = normalize(parse(b'<r><a/><a/></r>'))
        self.assertEqual(value['a'], Sequence([ABSENT, ABSENT]))

    def test_single_child_not_sequence(self):
        value = normalize(parse(ONE_KEY_LISTING))
        self.assertTrue(isinstance(value['Contents'], Map))

    def test_namespace_attribute_in_map(self):
        value = normalize(parse(b'<a xmlns="x"><b xmlns="y">t</b></a>'))
        self.assertEqual(value.to_python(), {
            'xmlns': 'x', 'b': {'xmlns': 'y', 'value': 't'}})


class TestNormalizeListing(unittest.TestCase):

    def test_single_contents_is_sequence(self):
        listing = normalize_listing(parse(ONE_KEY_LISTING))
        self.assertTrue(isinstance(listing['Contents'], Sequence))
        self.assertEqual(len(listing['Contents']), 1)
        entry = listing['Contents'][0]
        self.assertEqual(entry['Key'], 'my-image.jpg')
        self.assertEqual(entry['ETag'], '"fba9dede5f27731c9771645a39863328"')
        self.assertEqual(entry['Owner']['DisplayName'], 'mtd@amazon.com')
        self.assertTrue(listing['Prefix'] is ABSENT)
        self.assertTrue(listing['Marker'] is ABSENT)
        self.assertFalse('CommonPrefixes' in listing)

    def test_common_prefixes(self):
        listing = normalize_listing(parse(ROLLED_UP_LISTING))
        self.assertEqual(
            [p['Prefix'] for p in listing['CommonPrefixes']],
            ['photos/2006/feb/', 'photos/2006/jan/'])
        self.assertEqual(listing['Delimiter'], '/')
        self.assertFalse('Contents' in listing)

    def test_empty_contents_not_wrapped(self):
        listing = normalize_listing(parse(
            b'<ListBucketResult><Name>b</Name><Contents/>'
            b'<CommonPrefixes></CommonPrefixes></ListBucketResult>'))
        self.assertTrue(listing['Contents'] is ABSENT)
        self.assertTrue(listing['CommonPrefixes'] is ABSENT)
        self.assertEqual(list(listing.get('Contents') or []), [])

    def test_to_python(self):
        listing = normalize_listing(parse(ONE_KEY_LISTING))
        self.assertEqual(listing.to_python(), {
            'xmlns': NS,
            'Name': 'bucket',
            'Prefix': None,
            'Marker': None,
            'MaxKeys': '1000',
            'IsTruncated': 'false',
            'Contents': [{
                'Key': 'my-image.jpg',
                'LastModified': '2009-10-12T17:50:30.000Z',
                'ETag': '"fba9dede5f27731c9771645a39863328"',
                'Size': '434234',
                'StorageClass': 'STANDARD',
                'Owner': {
                    'ID': '75aa57f09aa0c8caeab4f8c24e99d10f8e7faeebf76c078ef'
                          'c7c6caea54ba06a',
                    'DisplayName': 'mtd@amazon.com'}}]})

    def test_error_document(self):
        value = normalize_listing(parse(
            b'<Error><Code>NoSuchBucket</Code><Message>gone</Message>'
            b'</Error>'))
        self.assertEqual(
            value.to_python(), {'Code': 'NoSuchBucket', 'Message': 'gone'})


if __name__ == '__main__':
    unittest.main()
