"""
# NBT for humans.

The Named Binary Tag format is a self-describing tree: a root compound holding
named values of fixed scalar kinds, arrays of integers, homogeneous lists and
further compounds. Every value is identified on the wire by a one byte ID, all
the numbers are big-endian.

Two basic main operations are defined for every tag:

 1. unpack(): read the payload from a stream and build the high-level
    representation. A container creates its children through the table
    mapping IDs to tag classes and recurses into them.

 2. pack(): encode the high-level representation into binary data.

The root of a file is an "implicit" compound, without ID, name and closing
END, optionally wrapped into gzip or zlib: load_root() and NBTFile take care
of that.

    >>> root = load_root(data)
    >>> root.find('.Data.Player.Health')
    <FloatTag(20.0)>

"""
from .enum import TagID, Compliant
from .fields import (
    Tag,
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
from .core import ListTag, CompoundTag
from .meta import create_tag, tag_class_from_id
from .properties import TagPath
from .compression import Compression, detect_compression
from .nbtfile import (
    NBTFile,
    load,
    load_root,
    encode,
    encode_named,
    decode_named,
)
from .exceptions import (
    NBTException,
    StreamException,
    TruncatedException,
    InvalidTagIDException,
    TypeMismatchException,
    IndexOutOfRangeException,
    NestingTooDeepException,
    EncodingException,
    NotFoundException,
)

__version__ = '0.1.0'
