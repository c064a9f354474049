"""
Converts XML response documents into nested values that are easy to
walk, using these rules for each element, children first:

* Attributes become keys of the element's map.
* Non-blank text becomes the key ``value``.
* Each child is stored under its element name; a name seen a second
  time turns into a sequence of both values, and later sightings are
  appended to that sequence.
* An element left with no keys at all becomes :py:data:`ABSENT`; one
  left with only the ``value`` key becomes that text directly.

So ``<Owner><ID>a1</ID><DisplayName>me</DisplayName></Owner>`` becomes
``Map({'ID': 'a1', 'DisplayName': 'me'})``, and ``<Marker/>`` becomes
:py:data:`ABSENT`.

Values are tagged (:py:class:`Absent`, :py:class:`Scalar`,
:py:class:`Map`, :py:class:`Sequence`); ``to_python()`` on any of
them gives the plain ``None``/``str``/``dict``/``list`` form.
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
import collections
from xml.etree import ElementTree


VALUE_KEY = 'value'

#: Listing entries that are always returned as sequences.
LIST_SEQUENCE_KEYS = ('Contents', 'CommonPrefixes')


def _split_tag(tag):
    if tag.startswith('{'):
        namespace, name = tag[1:].split('}', 1)
        return namespace, name
    return None, tag


class Element(collections.namedtuple(
        'Element', 'name attributes text children')):
    """
    A parsed XML element: its name, dict of attributes, text (or
    None) and list of child Elements.
    """
    __slots__ = ()

    @classmethod
    def from_etree(cls, node, parent_namespace=None):
        """
        Returns the Element for an xml.etree.ElementTree element.
        Namespace prefixes are dropped from names; where an element's
        namespace differs from its parent's it is kept as an xmlns
        attribute instead.
        """
        namespace, name = _split_tag(node.tag)
        attributes = dict(
            (_split_tag(k)[1], v) for k, v in node.attrib.items())
        if namespace and namespace != parent_namespace:
            attributes['xmlns'] = namespace
        children = [cls.from_etree(child, namespace) for child in node]
        return cls(name, attributes, node.text, children)

    @classmethod
    def from_string(cls, text):
        """
        Parses the XML document in text (bytes or str) and returns
        its root Element. Raises ElementTree.ParseError for malformed
        documents.
        """
        return cls.from_etree(ElementTree.fromstring(text))


class NormalizedValue(object):
    """Base class of the values produced by :py:func:`normalize`."""

    __slots__ = ()

    def to_python(self):
        raise NotImplementedError()


class Absent(NormalizedValue):
    """An element that had nothing in it."""

    __slots__ = ()

    def to_python(self):
        return None

    def __bool__(self):
        return False

    def __eq__(self, other):
        return isinstance(other, Absent)

    def __hash__(self):
        return hash(Absent)

    def __repr__(self):
        return 'ABSENT'


ABSENT = Absent()


class Scalar(NormalizedValue):
    """The text of an element that had nothing else."""

    __slots__ = ('text',)

    def __init__(self, text):
        self.text = text

    def to_python(self):
        return self.text

    def __str__(self):
        return self.text

    def __eq__(self, other):
        if isinstance(other, Scalar):
            return self.text == other.text
        return self.text == other

    def __hash__(self):
        return hash(self.text)

    def __repr__(self):
        return 'Scalar(%r)' % (self.text,)


class Map(NormalizedValue):
    """The keys of an element, from its attributes, text and children."""

    __slots__ = ('entries',)

    def __init__(self, entries=None):
        self.entries = dict(entries or {})

    def __getitem__(self, key):
        return self.entries[key]

    def __contains__(self, key):
        return key in self.entries

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    def get(self, key, default=None):
        return self.entries.get(key, default)

    def keys(self):
        return self.entries.keys()

    def items(self):
        return self.entries.items()

    def to_python(self):
        return dict((k, v.to_python()) for k, v in self.entries.items())

    def __eq__(self, other):
        return isinstance(other, Map) and self.entries == other.entries

    __hash__ = None

    def __repr__(self):
        return 'Map(%r)' % (self.entries,)


class Sequence(NormalizedValue):
    """The values of same named sibling elements, in document order."""

    __slots__ = ('values',)

    def __init__(self, values=None):
        self.values = list(values or [])

    def __getitem__(self, index):
        return self.values[index]

    def __iter__(self):
        return iter(self.values)

    def __len__(self):
        return len(self.values)

    def append(self, value):
        self.values.append(value)

    def to_python(self):
        return [v.to_python() for v in self.values]

    def __eq__(self, other):
        return isinstance(other, Sequence) and self.values == other.values

    __hash__ = None

    def __repr__(self):
        return 'Sequence(%r)' % (self.values,)


def _merge(items, name, value):
    existing = items.get(name)
    if existing is None:
        items[name] = value
    elif isinstance(existing, Sequence):
        existing.append(value)
    else:
        items[name] = Sequence([existing, value])


def normalize(element):
    """
    Returns the :py:class:`NormalizedValue` for the
    :py:class:`Element` given; see the module documentation for the
    rules applied.
    """
    items = {}
    for name, value in element.attributes.items():
        items[name] = Scalar(value)
    if element.text and element.text.strip():
        items[VALUE_KEY] = Scalar(element.text)
    for child in element.children:
        _merge(items, child.name, normalize(child))
    if not items:
        return ABSENT
    if len(items) == 1 and VALUE_KEY in items:
        return items[VALUE_KEY]
    return Map(items)


def normalize_listing(element):
    """
    Returns the normalized bucket listing for the root Element of a
    ListBucketResult document. Contents and CommonPrefixes are always
    Sequences when present, even if only one entry was returned; an
    empty entry is left as ABSENT.
    """
    result = normalize(element)
    if isinstance(result, Map):
        for key in LIST_SEQUENCE_KEYS:
            value = result.entries.get(key)
            if value and not isinstance(value, Sequence):
                result.entries[key] = Sequence([value])
    return result
