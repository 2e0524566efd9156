"""
A Tag is the "fundamental" datatype of the format: an ID telling its kind and
a payload whose shape depends on that kind. The leaf kinds (scalars, strings
and arrays) live here, the containers in the core module.
"""
import logging
import struct

from bitstring import Bits

from .constants import MAX_DEPTH, MAX_STRING_LENGTH, MAX_SEQUENCE_LENGTH
from .enum import TagID, Compliant, DEFAULT_COMPLIANT
from .meta import MetaTag
from .streams import Stream
from .exceptions import (
    EncodingException,
    IndexOutOfRangeException,
    NestingTooDeepException,
)


def get_root_from_tag(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


def pack_string(stream, value, errors='strict'):
    '''Write the 16-bit big-endian length and then the UTF-8 bytes of value.'''
    try:
        raw = value.encode('utf-8', errors)
    except UnicodeEncodeError as e:
        raise EncodingException(chain=[], msg=f'cannot encode {value!r}: {e.reason}') from e

    if len(raw) > MAX_STRING_LENGTH:
        raise ValueError(f'string of {len(raw)} bytes is longer than {MAX_STRING_LENGTH}')

    stream.write(struct.pack('>H', len(raw)))
    stream.write(raw)


def unpack_string(stream, errors='strict'):
    length = struct.unpack('>H', stream.read_exactly(2))[0]
    raw = stream.read_exactly(length)

    try:
        return raw.decode('utf-8', errors)
    except UnicodeDecodeError as e:
        raise EncodingException(chain=[], msg=f'invalid UTF-8 in {raw!r}: {e.reason}') from e


def pack_length(stream, length):
    if length > MAX_SEQUENCE_LENGTH:
        raise ValueError(f'{length} elements cannot be encoded')

    stream.write(struct.pack('>I', length))


def unpack_length(stream):
    return struct.unpack('>I', stream.read_exactly(4))[0]


class Tag(metaclass=MetaTag):
    """Base class to subclass from.

    The subclasses must define the class attribute "tag_id" and implement
    _pack()/_unpack() for their payload; the depth of the tag inside the tree
    is passed along so that the containers can refuse too deep trees.
    """
    tag_id = None
    max_depth = MAX_DEPTH

    def __init__(self, value=None, name=None, father=None, compliant=Compliant.INHERIT):
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = value
        self.compliant = compliant

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __str__(self):
        return str(self.value)

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented

        return self.tag_id == other.tag_id and self.value == other.value

    __hash__ = None

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    @property
    def root(self):
        '''Obtain the final father of this tag'''
        return get_root_from_tag(self)

    @property
    def depth(self):
        depth = 0
        instance = self
        while instance.father is not None:
            depth += 1
            instance = instance.father

        return depth

    def is_compliant(self, level):
        '''Walk up the hierarchy until a tag that doesn't inherit its compliantness'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                return False

            instance = instance.father

        return bool(DEFAULT_COMPLIANT & level)

    def _string_errors(self):
        return 'strict' if self.is_compliant(Compliant.ENCODING) else 'surrogateescape'

    def _check_depth(self, depth, max_depth):
        if depth > max_depth:
            raise NestingTooDeepException(
                chain=[],
                msg=f'{self.tag_id.label} nested at depth {depth}, the limit is {max_depth}')

    @property
    def raw(self):
        return self.pack()

    @property
    def size(self):
        return len(self.raw)

    def pack(self, stream=None, max_depth=None):
        '''Encode the payload of the tag (no ID and no name).

        When no stream is passed the encoded bytes are returned.'''
        own = stream is None
        stream = Stream(b'') if own else stream
        if not isinstance(stream, Stream):
            stream = Stream(stream)

        max_depth = self.root.max_depth if max_depth is None else max_depth
        self._pack(stream, self.depth, max_depth)

        if own:
            return stream.getvalue()

    def unpack(self, stream, max_depth=None):
        '''Decode the payload from the stream, replacing the actual value.'''
        if not isinstance(stream, Stream):
            stream = Stream(stream)

        max_depth = self.root.max_depth if max_depth is None else max_depth
        self._unpack(stream, self.depth, max_depth)

        return self

    def _pack(self, stream, depth, max_depth):
        raise NotImplementedError(f'method {self.__class__.__name__}._pack() not implemented')

    def _unpack(self, stream, depth, max_depth):
        raise NotImplementedError(f'method {self.__class__.__name__}._unpack() not implemented')

    def pretty_value(self):
        return str(self.value)

    def pretty(self, key=None, indent=0, raw=False):
        '''Human readable rendering of the tag, one line for a leaf.'''
        data = self.pretty_value()
        if raw:
            return '\t' * indent + data

        key = self.name if key is None else key

        return '%s%s(%r): %s' % ('\t' * indent, self.tag_id.label, key, data)


class EndTag(Tag):
    '''Zero-payload sentinel: on the wire it closes a compound, it is never a value.'''
    tag_id = TagID.END

    def _pack(self, stream, depth, max_depth):
        pass

    def _unpack(self, stream, depth, max_depth):
        pass

    def pretty_value(self):
        return ''


class StructTag(Tag):
    """
    Simplest of the tags: mimic the behaviour of the struct module packing/unpacking
    numbers to/from bytes, always big-endian.

    The value is normalized when set, so that what you read back is exactly what
    will be decoded later (think of the rounding to single precision of a float).
    """
    format = None

    def value_from_default(self):
        return 0 if self.default is None else self.default

    def get_format(self):
        return '>%s' % self.format

    def _pack_struct(self, value):
        try:
            return struct.pack(self.get_format(), value)
        except (struct.error, OverflowError) as e:
            raise ValueError(f'{value!r} cannot be stored in a {self.tag_id.label}: {e}') from e

    def _unpack_struct(self, raw):
        return struct.unpack(self.get_format(), raw)[0]

    def _set_value(self, value):
        if isinstance(value, bool):
            raise TypeError(f'{self.tag_id.label} holds numbers, not bool')

        self._value = self._unpack_struct(self._pack_struct(value))

    @property
    def size(self):
        return struct.calcsize(self.get_format())

    def _pack(self, stream, depth, max_depth):
        stream.write(self._pack_struct(self.value))

    def _unpack(self, stream, depth, max_depth):
        self._value = self._unpack_struct(stream.read_exactly(self.size))


class ByteTag(StructTag):
    tag_id = TagID.BYTE
    format = 'b'


class ShortTag(StructTag):
    tag_id = TagID.SHORT
    format = 'h'


class IntTag(StructTag):
    tag_id = TagID.INT
    format = 'i'


class LongTag(StructTag):
    tag_id = TagID.LONG
    format = 'q'


class FloatTag(StructTag):
    tag_id = TagID.FLOAT
    format = 'f'


class DoubleTag(StructTag):
    tag_id = TagID.DOUBLE
    format = 'd'


class StringTag(Tag):
    """Text prefixed by its length in bytes.

    Decoding is strict UTF-8 unless the tree is not compliant with
    Compliant.ENCODING: in that case the bytes that are not valid UTF-8 are
    kept as surrogate escapes and written back untouched."""
    tag_id = TagID.STRING

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        return '' if self.default is None else self.default

    def _set_value(self, value):
        if not isinstance(value, str):
            raise TypeError(f'{self.tag_id.label} holds str, not {value.__class__.__name__}')

        self._value = value

    def _pack(self, stream, depth, max_depth):
        pack_string(stream, self.value, self._string_errors())

    def _unpack(self, stream, depth, max_depth):
        self._value = unpack_string(stream, self._string_errors())

    def pretty_value(self):
        return repr(self.value)


class ArrayTag(Tag):
    '''Un/Pack a sequence of signed integers, all of the same width.

    It behaves like a list in python, except that indexes outside the
    actual bounds (negative ones included) are refused.'''
    width = None  # in bits

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __getitem__(self, index):
        self._check_index(index)
        return self.value[index]

    def __setitem__(self, index, element):
        self._check_index(index)
        self._check_element(element)
        self.value[index] = element

    def __delitem__(self, index):
        self.remove(index)

    def value_from_default(self):
        return [] if self.default is None else self.default

    def _set_value(self, value):
        elements = list(value)
        for element in elements:
            self._check_element(element)

        self._value = elements

    def _check_index(self, index):
        if not isinstance(index, int):
            raise TypeError(f'indices must be integers, not {index.__class__.__name__}')

        if not 0 <= index < len(self.value):
            raise IndexOutOfRangeException(
                chain=[],
                msg=f'index {index} out of range for {self.tag_id.label} of length {len(self.value)}')

    def _check_element(self, element):
        if not isinstance(element, int) or isinstance(element, bool):
            raise TypeError(f'{self.tag_id.label} holds integers, not {element.__class__.__name__}')

        bound = 1 << (self.width - 1)
        if not -bound <= element < bound:
            raise ValueError(f'{element} cannot be stored in a {self.tag_id.label}')

    def append(self, element):
        self._check_element(element)
        self.value.append(element)

    def remove(self, index):
        '''Remove the element at index, the following ones are shifted left.'''
        self._check_index(index)
        del self.value[index]

    def _pack(self, stream, depth, max_depth):
        pack_length(stream, len(self.value))
        elements = Bits().join(Bits(int=_, length=self.width) for _ in self.value)
        stream.write(elements.bytes)

    def _unpack(self, stream, depth, max_depth):
        length = unpack_length(stream)
        raw = stream.read_exactly(length * self.width // 8)

        self._value = [_.int for _ in Bits(raw).cut(self.width)]

    def pretty_element(self, element):
        return str(element)

    def pretty_value(self):
        elements = ', '.join(self.pretty_element(_) for _ in self.value)
        return f'{len(self.value)} elements [{elements}]'


class ByteArrayTag(ArrayTag):
    tag_id = TagID.BYTE_ARRAY
    width = 8

    def _set_value(self, value):
        # raw bytes are reinterpreted as signed
        if isinstance(value, (bytes, bytearray)):
            value = [_ - 0x100 if _ > 0x7f else _ for _ in value]

        super()._set_value(value)

    @property
    def data(self):
        return bytes(_ & 0xff for _ in self.value)

    def pretty_element(self, element):
        return '0x%02x' % (element & 0xff)


class IntArrayTag(ArrayTag):
    tag_id = TagID.INT_ARRAY
    width = 32


class LongArrayTag(ArrayTag):
    tag_id = TagID.LONG_ARRAY
    width = 64
