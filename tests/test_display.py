from nbtstruct import (
    TagID,
    CompoundTag,
    ListTag,
    ByteTag,
    IntTag,
    StringTag,
    ByteArrayTag,
    LongArrayTag,
)


def test_pretty_leaf():
    assert IntTag(42, name='answer').pretty() == "TAG_Int('answer'): 42"
    assert IntTag(5).pretty() == 'TAG_Int(None): 5'
    assert IntTag(5).pretty(raw=True) == '5'
    assert StringTag('x').pretty(key='s') == "TAG_String('s'): 'x'"


def test_pretty_arrays():
    assert ByteArrayTag([1, -1], name='b').pretty() == "TAG_Byte_Array('b'): 2 elements [0x01, 0xff]"
    assert LongArrayTag([1, -2], name='l').pretty() == "TAG_Long_Array('l'): 2 elements [1, -2]"


def test_pretty_tree():
    tag = CompoundTag({
        'a': ByteTag(1),
        'l': ListTag(TagID.STRING, [StringTag('x')]),
    })

    assert tag.pretty(key='root') == '\n'.join([
        "TAG_Compound('root'): 2 entries",
        '{',
        "\tTAG_Byte('a'): 1",
        "\tTAG_List('l'): 1 entries",
        '\t[',
        "\t\tTAG_String('[0]'): 'x'",
        '\t]',
        '}',
    ])
    assert str(tag) == tag.pretty()


def test_pretty_raw():
    tag = CompoundTag({'a': ByteTag(1), 'b': IntTag(2)})

    assert tag.pretty(raw=True) == '2 entries\n\t1\n\t2'
