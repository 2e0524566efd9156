import pytest

from nbtstruct import (
    TagID,
    NBTFile,
    CompoundTag,
    ListTag,
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


@pytest.fixture
def sample_root():
    """A root using every kind of tag, containers nested in containers."""
    player = CompoundTag()
    player.put_float('Health', 20.0)
    player.put_string('Name', 'Steve')
    player.put('Pos', ListTag(TagID.DOUBLE, [DoubleTag(0.5), DoubleTag(64.0), DoubleTag(-12.25)]))
    player.put('Inventory', ListTag(TagID.COMPOUND, [
        CompoundTag({'id': StringTag('minecraft:stone'), 'Count': ByteTag(64)}),
        CompoundTag({'id': StringTag('minecraft:torch'), 'Count': ByteTag(3)}),
    ]))

    data = CompoundTag()
    data.put_byte('hardcore', 0)
    data.put_short('Difficulty', 2)
    data.put_int('GameType', 1)
    data.put_long('RandomSeed', -4172144997902289642)
    data.put('Player', player)
    data.put('Heights', IntArrayTag([63, 64, 65, -1]))
    data.put('States', LongArrayTag([2 ** 62, -2 ** 63]))
    data.put('Biomes', ByteArrayTag([1, 2, -128, 127]))
    data.put('Empty', ListTag())
    data.put('Matrix', ListTag(TagID.LIST, [
        ListTag(TagID.INT, [IntTag(1), IntTag(2)]),
        ListTag(TagID.INT, [IntTag(3)]),
    ]))

    root = NBTFile()
    root.put('', CompoundTag({'Data': data}))

    return root
