"""Limits and magic numbers of the NBT binary format."""

# Containers nested deeper than this are refused both when decoding and
# when encoding. The root compound sits at depth zero.
MAX_DEPTH = 512

# Strings carry an unsigned 16-bit length prefix, arrays and lists an
# unsigned 32-bit one.
MAX_STRING_LENGTH = 0xffff
MAX_SEQUENCE_LENGTH = 0xffffffff

GZIP_MAGIC = b'\x1f\x8b'

# first byte of a zlib stream using deflate (CM=8) with a 32K window
ZLIB_CMF = 0x78

# Decompressed files bigger than this are refused before decoding starts.
MAX_DECOMPRESSED_SIZE = 256 * 1024 * 1024
