'''
# Compression envelopes

Files are usually stored compressed, with gzip (the player and level files) or
with zlib (the chunks inside the region files). Detection is safe because an
uncompressed stream starts with a tag ID, that is a byte between 0 and 12,
while the gzip magic starts with 0x1f and a zlib header with 0x78.

Inflating is bounded: a stream that would expand beyond max_size is refused
as soon as the limit is crossed, without inflating the rest of it.
'''
import gzip
import logging
import zlib
from enum import Enum

from .constants import GZIP_MAGIC, ZLIB_CMF, MAX_DECOMPRESSED_SIZE
from .exceptions import StreamException


logger = logging.getLogger(__name__)

# window bits selecting the gzip header and trailer
GZIP_WBITS = 16 + zlib.MAX_WBITS


class Compression(Enum):
    NONE = 0
    GZIP = 1
    ZLIB = 2


def detect_compression(data: bytes) -> Compression:
    if data[:2] == GZIP_MAGIC:
        return Compression.GZIP

    # CMF/FLG pair must be a multiple of 31
    if len(data) >= 2 and data[0] == ZLIB_CMF and ((data[0] << 8) | data[1]) % 31 == 0:
        return Compression.ZLIB

    return Compression.NONE


def _inflate(data: bytes, compression: Compression, max_size: int) -> bytes:
    '''Inflate one gzip member (or the zlib stream) at a time, never
    producing more than max_size bytes overall.'''
    wbits = GZIP_WBITS if compression == Compression.GZIP else zlib.MAX_WBITS
    name = compression.name.lower()

    chunks = []
    size = 0
    while data:
        inflater = zlib.decompressobj(wbits)
        chunk = inflater.decompress(data, max_size - size + 1)
        size += len(chunk)

        if size > max_size:
            raise StreamException(chain=[], msg=f'{name} stream expands beyond {max_size} bytes')

        if not inflater.eof:
            raise StreamException(chain=[], msg=f'corrupted {name} stream: truncated')

        chunks.append(chunk)

        # gzip allows concatenated members
        data = inflater.unused_data if compression == Compression.GZIP else b''

    return b''.join(chunks)


def decompress(data: bytes, compression: Compression = None, max_size: int = MAX_DECOMPRESSED_SIZE) -> bytes:
    compression = detect_compression(data) if compression is None else compression
    logger.debug('decompressing %d bytes using %s' % (len(data), compression))

    if compression == Compression.NONE:
        return data

    try:
        return _inflate(data, compression, max_size)
    except zlib.error as e:
        raise StreamException(chain=[], msg=f'corrupted {compression.name.lower()} stream: {e}') from e


def compress(data: bytes, compression: Compression) -> bytes:
    if compression == Compression.GZIP:
        return gzip.compress(data)
    if compression == Compression.ZLIB:
        return zlib.compress(data)

    return data
