import struct

import pytest

from nbtstruct.enum import TagID, Compliant
from nbtstruct.exceptions import (
    TruncatedException,
    IndexOutOfRangeException,
    EncodingException,
)
from nbtstruct.fields import (
    EndTag,
    ByteTag,
    ShortTag,
    IntTag,
    LongTag,
    FloatTag,
    DoubleTag,
    StringTag,
    ByteArrayTag,
    IntArrayTag,
    LongArrayTag,
)


def test_structtag_big_endian():
    """Check that "value" and "raw" are the analogous of the numbers and
    bytes representation for a tag, most significant byte first."""
    assert ShortTag(300).raw == b'\x01\x2c'
    assert IntTag(42).raw == b'\x00\x00\x00\x2a'
    assert LongTag(-1).raw == b'\xff' * 8
    assert ByteTag(-2).raw == b'\xfe'
    assert DoubleTag(1.5).raw == b'\x3f\xf8' + b'\x00' * 6
    assert FloatTag(float('inf')).raw == b'\x7f\x80\x00\x00'


@pytest.mark.parametrize('cls,size', [
    (ByteTag, 1),
    (ShortTag, 2),
    (IntTag, 4),
    (LongTag, 8),
    (FloatTag, 4),
    (DoubleTag, 8),
])
def test_structtag_size(cls, size):
    field = cls()

    assert field.size == size
    assert field.value == 0
    assert field.raw == b'\x00' * size


def test_structtag_unpack():
    field = IntTag()

    assert field.unpack(b'\xff\xff\xff\xfe') is field
    assert field.value == -2

    field = ShortTag().unpack(b'\x80\x00')
    assert field.value == -0x8000


def test_structtag_truncated():
    with pytest.raises(TruncatedException):
        IntTag().unpack(b'\x00\x01')

    with pytest.raises(TruncatedException):
        DoubleTag().unpack(b'')


@pytest.mark.parametrize('cls,value', [
    (ByteTag, 128),
    (ByteTag, -129),
    (ShortTag, 0x8000),
    (IntTag, 2 ** 31),
    (LongTag, -2 ** 63 - 1),
    (IntTag, 1.5),
])
def test_structtag_out_of_range(cls, value):
    with pytest.raises(ValueError):
        cls(value)


def test_floattag_single_precision():
    """The value is rounded when set so that a round trip doesn't change it."""
    field = FloatTag(0.1)

    assert field.value == struct.unpack('>f', struct.pack('>f', 0.1))[0]
    assert field.value != 0.1
    assert FloatTag().unpack(field.raw) == field


def test_stringtag():
    field = StringTag('hello')

    assert field.raw == b'\x00\x05hello'
    assert len(field) == 5
    assert StringTag('è').raw == b'\x00\x02\xc3\xa8'
    assert StringTag().raw == b'\x00\x00'

    field = StringTag().unpack(b'\x00\x03abcdef')
    assert field.value == 'abc'


def test_stringtag_truncated():
    with pytest.raises(TruncatedException):
        StringTag().unpack(b'\x00\x05hel')

    with pytest.raises(TruncatedException):
        StringTag().unpack(b'\x00')


def test_stringtag_wrong_value():
    with pytest.raises(TypeError):
        StringTag(3)

    with pytest.raises(ValueError):
        StringTag('a' * 0x10000).pack()


def test_stringtag_encoding():
    """Strict by default, bytes preserved when not compliant."""
    with pytest.raises(EncodingException):
        StringTag().unpack(b'\x00\x01\xff')

    field = StringTag(compliant=Compliant.NONE)
    field.unpack(b'\x00\x02a\xff')

    assert field.value == 'a\udcff'
    assert field.raw == b'\x00\x02a\xff'

    with pytest.raises(EncodingException):
        StringTag('\udcff').pack()


def test_bytearraytag():
    field = ByteArrayTag([1, -1, 127])

    assert field.raw == b'\x00\x00\x00\x03\x01\xff\x7f'
    assert ByteArrayTag().unpack(field.raw).value == [1, -1, 127]

    field = ByteArrayTag(b'\x00\xff\x80')

    assert field.value == [0, -1, -128]
    assert field.data == b'\x00\xff\x80'


def test_intarraytag():
    field = IntArrayTag([1, -2])

    assert field.raw == (
        b'\x00\x00\x00\x02' +
        b'\x00\x00\x00\x01' +
        b'\xff\xff\xff\xfe'
    )
    assert IntArrayTag().unpack(field.raw) == field
    assert IntArrayTag().raw == b'\x00\x00\x00\x00'


def test_longarraytag():
    field = LongArrayTag([2 ** 62, -2 ** 63])

    assert field.raw == b'\x00\x00\x00\x02' + struct.pack('>qq', 2 ** 62, -2 ** 63)
    assert LongArrayTag().unpack(field.raw).value == [2 ** 62, -2 ** 63]


def test_arraytag_truncated():
    with pytest.raises(TruncatedException):
        IntArrayTag().unpack(b'\x00\x00\x00\x02\x00\x00\x00\x01')

    with pytest.raises(TruncatedException):
        LongArrayTag().unpack(b'\x00\x00')


def test_arraytag_accessors():
    field = IntArrayTag([1, 2, 3])

    assert field[1] == 2

    field[1] = 5
    field.append(4)
    field.remove(0)

    assert field.value == [5, 3, 4]
    assert len(field) == 3
    assert list(field) == [5, 3, 4]

    del field[2]
    assert field.value == [5, 3]

    with pytest.raises(IndexOutOfRangeException):
        field[2]

    with pytest.raises(IndexOutOfRangeException):
        field[-1]

    with pytest.raises(IndexError):
        field.remove(10)

    with pytest.raises(ValueError):
        field.append(2 ** 31)

    with pytest.raises(ValueError):
        ByteArrayTag().append(200)


def test_endtag():
    field = EndTag()

    assert field.tag_id == TagID.END
    assert field.raw == b''
    assert field.size == 0


def test_tag_equality():
    assert IntTag(1) == IntTag(1)
    assert IntTag(1) != IntTag(2)
    assert IntTag(1) != LongTag(1)
    assert StringTag('a') != 'a'


def test_tagid_label():
    assert TagID.END.label == 'TAG_End'
    assert TagID.BYTE_ARRAY.label == 'TAG_Byte_Array'
    assert TagID.COMPOUND.label == 'TAG_Compound'


@pytest.mark.parametrize('cls', [ByteTag, IntTag, LongTag, DoubleTag])
def test_structtag_refuses_bool(cls):
    with pytest.raises(TypeError):
        cls(True)

    with pytest.raises(TypeError):
        IntArrayTag([False])
