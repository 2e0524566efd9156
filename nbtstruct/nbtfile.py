'''
# NBT files

A file is a sequence of named tags without any header: in practice it is
read as an implicit compound, i.e. a compound without ID, without name and
without the closing END. The whole stream can be wrapped in a gzip or zlib
envelope, which is detected and removed transparently.

Most of the files written by the game contain a single compound named ''
so that the interesting data is at the path '.Data' or similar.
'''
import struct

from .constants import MAX_DEPTH
from .enum import Compliant
from .core import CompoundTag
from .meta import create_tag
from .fields import pack_string, unpack_string
from .streams import Stream
from .compression import Compression, detect_compression, decompress, compress
from .exceptions import StreamException


class NBTFile(CompoundTag):
    '''The root compound of a file.

    Like a compound it can be built from scratch and packed; passing a
    filepath with the constructor opens and unpacks it right away.'''

    def __init__(self, filepath=None, value=None, max_depth=MAX_DEPTH, compliant=Compliant.INHERIT):
        self.filepath = filepath
        self.compression = Compression.NONE
        super().__init__(value=value, implicit=True, compliant=compliant)
        self.max_depth = max_depth

        if filepath is not None:
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, filepath))
            with Stream(str(filepath)) as stream:
                data = stream.read_all()

            self.decode(data)

    def decode(self, data):
        '''Unpack a whole file content, compressed or not.'''
        self.compression = detect_compression(data)
        self.logger.debug('detected compression %s' % self.compression)

        self.unpack(decompress(data, self.compression))

        return self

    def encode(self, compression=None):
        compression = self.compression if compression is None else compression

        return compress(self.pack(), compression)

    def save(self, filepath=None, compression=None):
        '''Write the tree back to filepath (by default where it was read from)
        with the given compression (by default the one it was read with).'''
        filepath = self.filepath if filepath is None else filepath
        if filepath is None:
            raise ValueError('no path to save to')

        data = self.encode(compression)

        try:
            with open(filepath, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise StreamException(chain=[], msg=f'cannot write \'{filepath}\': {e.strerror}') from e

        self.filepath = filepath


def load_root(data, max_depth=MAX_DEPTH, compliant=Compliant.INHERIT):
    '''Decode the content of a file as its root compound.'''
    return NBTFile(max_depth=max_depth, compliant=compliant).decode(data)


def load(filepath, max_depth=MAX_DEPTH, compliant=Compliant.INHERIT):
    return NBTFile(filepath, max_depth=max_depth, compliant=compliant)


def encode(tag):
    '''The payload of any tag, the way it appears inside its container.'''
    return tag.pack()


def encode_named(tag, name=''):
    '''ID, name and payload: a single entry of a compound.'''
    stream = Stream(b'')
    stream.write(struct.pack('>B', tag.tag_id))
    pack_string(stream, name, tag._string_errors())
    tag.pack(stream)

    return stream.getvalue()


def decode_named(data, max_depth=MAX_DEPTH, compliant=Compliant.INHERIT):
    '''The inverse of encode_named(): it returns the couple (name, tag).'''
    stream = data if isinstance(data, Stream) else Stream(data)

    tag = create_tag(stream.read_exactly(1)[0])
    tag.compliant = compliant
    name = unpack_string(stream, tag._string_errors())
    tag.unpack(stream, max_depth=max_depth)

    return name, tag
