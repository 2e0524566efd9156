"""
Core module for the container tags: the list and the compound.

Both of them decode their children through the same table (see meta.create_tag)
and so recurse naturally into nested containers; when a child fails, its key
(or its "[index]" for a list) is prepended to the exception's chain and the
exception keeps going up, no partial tree is left behind.
"""
import struct

from .enum import TagID
from .meta import create_tag, tag_class_from_id
from .fields import (
    Tag,
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
    pack_length,
    unpack_length,
    pack_string,
    unpack_string,
)
from .exceptions import (
    NBTException,
    InvalidTagIDException,
    NotFoundException,
    TypeMismatchException,
    IndexOutOfRangeException,
)


def _check_not_ancestor(container, tag):
    instance = container
    while instance is not None:
        if instance is tag:
            raise ValueError(f'{tag!r} cannot be a descendant of itself')
        instance = instance.father


def _check_not_owned(tag):
    '''A tag belongs to a single container at a time: remove it from there first.'''
    father = tag.father
    if isinstance(father, CompoundTag):
        siblings = father.value.values()
    elif isinstance(father, ListTag):
        siblings = father.value
    else:
        return

    if any(_ is tag for _ in siblings):
        raise ValueError(f'{tag!r} already belongs to {father!r}')


def _release(tag):
    tag.father = None
    tag.name = None


class ListTag(Tag):
    '''Ordered sequence of tags all of the same kind, the "element_id".

    An empty list can be declared of kind END: appending the first element
    makes it adopt the kind of that element.'''
    tag_id = TagID.LIST

    def __init__(self, element_id=None, value=None, **kwargs):
        if element_id is None:
            element_id = value[0].tag_id if value and isinstance(value[0], Tag) else TagID.END

        self.element_id = TagID(element_id)
        super().__init__(value=value, **kwargs)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.element_id.name}, {self.value!r})>'

    def __eq__(self, other):
        if not isinstance(other, ListTag):
            return NotImplemented

        return self.element_id == other.element_id and self.value == other.value

    __hash__ = None

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __getitem__(self, index):
        self._check_index(index)
        return self.value[index]

    def __setitem__(self, index, tag):
        self._check_index(index)

        previous = self.value[index]
        if previous is tag:
            return

        self._attach(tag)
        _release(previous)
        self.value[index] = tag

    def __delitem__(self, index):
        self.remove(index)

    def value_from_default(self):
        return [] if self.default is None else self.default

    def _set_value(self, value):
        previous = getattr(self, '_value', [])
        tags = list(value)
        if self.element_id == TagID.END and tags and isinstance(tags[0], Tag):
            self.element_id = tags[0].tag_id

        # the actual children can be passed again, but only once each
        reusable = {id(_) for _ in previous}
        seen = set()
        for tag in tags:
            if id(tag) in seen:
                raise ValueError(f'{tag!r} appears twice')
            seen.add(id(tag))
            self._check_child(tag, reusable)

        for tag in previous:
            if id(tag) not in seen:
                _release(tag)

        for tag in tags:
            self._adopt(tag)

        self._value = tags

    def _check_index(self, index):
        if not isinstance(index, int):
            raise TypeError(f'indices must be integers, not {index.__class__.__name__}')

        if not 0 <= index < len(self.value):
            raise IndexOutOfRangeException(
                chain=[],
                msg=f'index {index} out of range for {self.tag_id.label} of length {len(self.value)}')

    def _check_child(self, tag, reusable=()):
        if not isinstance(tag, Tag) or tag.tag_id == TagID.END or tag.tag_id != self.element_id:
            kind = tag.tag_id.label if isinstance(tag, Tag) else tag.__class__.__name__
            raise TypeMismatchException(
                chain=[],
                msg=f'{self.tag_id.label} of {self.element_id.label} cannot hold {kind}')

        if id(tag) not in reusable:
            _check_not_owned(tag)
        _check_not_ancestor(self, tag)

    def _adopt(self, tag):
        tag.father = self
        tag.name = None

    def _attach(self, tag):
        self._check_child(tag)
        self._adopt(tag)

    def append(self, tag):
        element_id = self.element_id
        if element_id == TagID.END and not self.value and isinstance(tag, Tag) and tag.tag_id != TagID.END:
            self.element_id = tag.tag_id

        try:
            self._attach(tag)
        except (TypeError, ValueError):
            self.element_id = element_id
            raise

        self.value.append(tag)

    def remove(self, index):
        '''Remove the element at index, the following ones are shifted left.

        The removed tag is detached and can be put somewhere else.'''
        self._check_index(index)
        _release(self.value.pop(index))

    def _pack(self, stream, depth, max_depth):
        self._check_depth(depth, max_depth)

        if self.element_id == TagID.END and self.value:
            raise TypeMismatchException(chain=[], msg=f'{self.tag_id.label} of {TagID.END.label} must be empty')

        self.logger.debug('packing %s of %d %s' % (self.tag_id.label, len(self.value), self.element_id.label))

        stream.write(struct.pack('>B', self.element_id))
        pack_length(stream, len(self.value))

        for index, tag in enumerate(self.value):
            component = f'[{index}]'
            if tag.tag_id != self.element_id:
                raise TypeMismatchException(
                    chain=[component],
                    msg=f'{tag.tag_id.label} in a {self.tag_id.label} of {self.element_id.label}')
            try:
                tag._pack(stream, depth + 1, max_depth)
            except NBTException as e:
                e.chain.insert(0, component)
                raise

    def _unpack(self, stream, depth, max_depth):
        self._check_depth(depth, max_depth)

        element_id = struct.unpack('>B', stream.read_exactly(1))[0]
        element_cls = tag_class_from_id(element_id)
        length = unpack_length(stream)

        self.logger.debug('unpacking %s of %d %s' % (self.tag_id.label, length, element_cls.tag_id.label))

        if element_cls.tag_id == TagID.END and length:
            raise InvalidTagIDException(
                chain=[],
                msg=f'{self.tag_id.label} of {TagID.END.label} with {length} elements')

        tags = []
        for index in range(length):
            tag = create_tag(element_id, father=self)
            try:
                tag._unpack(stream, depth + 1, max_depth)
            except NBTException as e:
                e.chain.insert(0, f'[{index}]')
                raise
            tags.append(tag)

        self.element_id = element_cls.tag_id
        for tag in self._value:
            _release(tag)
        self._value = tags

    def pretty_value(self):
        return f'{len(self.value)} entries'

    def pretty(self, key=None, indent=0, raw=False):
        lines = [super().pretty(key=key, indent=indent, raw=raw)]
        if not raw:
            lines.append('\t' * indent + '[')

        for index, tag in enumerate(self.value):
            lines.append(tag.pretty(key=f'[{index}]', indent=indent + 1, raw=raw))

        if not raw:
            lines.append('\t' * indent + ']')

        return '\n'.join(lines)


class CompoundTag(Tag):
    '''Mapping from names to tags.

    On the wire each child is written as its ID, its name and its payload, and an
    END closes the compound; the "implicit" compound (the root of a file) has no
    closing END: decoding it stops at an END as well as at the end of the stream.

    The children are kept in insertion order, which is also the order of
    encoding; putting an existing name replaces the tag keeping its position.'''
    tag_id = TagID.COMPOUND

    def __init__(self, value=None, implicit=False, **kwargs):
        self.implicit = implicit
        super().__init__(value=value, **kwargs)

    def __str__(self):
        return self.pretty()

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __contains__(self, key):
        return key in self.value

    def __getitem__(self, key):
        try:
            return self.value[key]
        except KeyError:
            raise NotFoundException(chain=[], msg=f'no tag named \'{key}\'') from None

    def __setitem__(self, key, tag):
        self.put(key, tag)

    def __delitem__(self, key):
        self.remove(key)

    def value_from_default(self):
        return {} if self.default is None else self.default

    def _set_value(self, value):
        previous = getattr(self, '_value', {})
        tags = dict(value)

        # the actual children can be passed again, but only once each
        reusable = {id(_) for _ in previous.values()}
        seen = set()
        for key, tag in tags.items():
            if id(tag) in seen:
                raise ValueError(f'{tag!r} appears twice')
            seen.add(id(tag))
            self._check_child(key, tag, reusable)

        for tag in previous.values():
            if id(tag) not in seen:
                _release(tag)

        for key, tag in tags.items():
            self._adopt(key, tag)

        self._value = tags

    def _check_child(self, key, tag, reusable=()):
        if not isinstance(key, str):
            raise TypeError(f'names must be str, not {key.__class__.__name__}')

        if not isinstance(tag, Tag) or tag.tag_id == TagID.END:
            kind = tag.tag_id.label if isinstance(tag, Tag) else tag.__class__.__name__
            raise TypeMismatchException(chain=[key], msg=f'{kind} cannot be stored in a {self.tag_id.label}')

        if id(tag) not in reusable:
            _check_not_owned(tag)
        _check_not_ancestor(self, tag)

    def _adopt(self, key, tag):
        tag.father = self
        tag.name = key

    def get(self, key, default=None):
        return self.value.get(key, default)

    def put(self, key, tag):
        '''Store tag under key, replacing (and detaching) the tag already there.'''
        previous = self.value.get(key)
        if previous is tag:
            return

        self._check_child(key, tag)
        self._adopt(key, tag)
        if previous is not None:
            _release(previous)

        self.value[key] = tag

    def remove(self, key):
        '''The removed tag is detached and can be put somewhere else.'''
        if key not in self.value:
            raise NotFoundException(chain=[], msg=f'no tag named \'{key}\'')

        _release(self.value.pop(key))

    def contains(self, key):
        return key in self.value

    def keys(self):
        return self.value.keys()

    def items(self):
        return self.value.items()

    def values(self):
        return self.value.values()

    def find(self, expression):
        '''Resolve a dotted path like "Data.Player.Inventory[2].id" starting from here.'''
        from .properties import TagPath
        return TagPath(expression).resolve(self)

    def _get_typed(self, key, tag_cls):
        '''A missing key and a tag of the wrong kind are the same thing: no value.'''
        tag = self.value.get(key)
        if not isinstance(tag, tag_cls):
            return None, False

        return tag.value, True

    def get_byte(self, key):
        return self._get_typed(key, ByteTag)

    def put_byte(self, key, value):
        self.put(key, ByteTag(value))

    def get_short(self, key):
        return self._get_typed(key, ShortTag)

    def put_short(self, key, value):
        self.put(key, ShortTag(value))

    def get_int(self, key):
        return self._get_typed(key, IntTag)

    def put_int(self, key, value):
        self.put(key, IntTag(value))

    def get_long(self, key):
        return self._get_typed(key, LongTag)

    def put_long(self, key, value):
        self.put(key, LongTag(value))

    def get_float(self, key):
        return self._get_typed(key, FloatTag)

    def put_float(self, key, value):
        self.put(key, FloatTag(value))

    def get_double(self, key):
        return self._get_typed(key, DoubleTag)

    def put_double(self, key, value):
        self.put(key, DoubleTag(value))

    def get_string(self, key):
        return self._get_typed(key, StringTag)

    def put_string(self, key, value):
        self.put(key, StringTag(value))

    def get_byte_array(self, key):
        return self._get_typed(key, ByteArrayTag)

    def put_byte_array(self, key, value):
        self.put(key, ByteArrayTag(value))

    def get_int_array(self, key):
        return self._get_typed(key, IntArrayTag)

    def put_int_array(self, key, value):
        self.put(key, IntArrayTag(value))

    def get_long_array(self, key):
        return self._get_typed(key, LongArrayTag)

    def put_long_array(self, key, value):
        self.put(key, LongArrayTag(value))

    def get_list(self, key):
        tag = self.value.get(key)
        if not isinstance(tag, ListTag):
            return None, False

        return tag, True

    def get_compound(self, key):
        tag = self.value.get(key)
        if not isinstance(tag, CompoundTag):
            return None, False

        return tag, True

    def _pack(self, stream, depth, max_depth):
        self._check_depth(depth, max_depth)
        self.logger.debug('packing %s with %d entries' % (self.tag_id.label, len(self.value)))

        errors = self._string_errors()
        for key, tag in self.value.items():
            try:
                stream.write(struct.pack('>B', tag.tag_id))
                pack_string(stream, key, errors)
                tag._pack(stream, depth + 1, max_depth)
            except NBTException as e:
                e.chain.insert(0, key)
                raise

        if not self.implicit:
            stream.write(struct.pack('>B', TagID.END))

    def _unpack(self, stream, depth, max_depth):
        self._check_depth(depth, max_depth)

        errors = self._string_errors()
        tags = {}
        while True:
            if self.implicit:
                tag_id = stream.read_byte()
                if tag_id is None:
                    break
            else:
                tag_id = stream.read_exactly(1)[0]

            if tag_id == TagID.END:
                break

            tag = create_tag(tag_id, father=self)
            key = unpack_string(stream, errors)

            self.logger.debug('unpacking %s.%s' % (self.tag_id.label, key))

            try:
                tag._unpack(stream, depth + 1, max_depth)
            except NBTException as e:
                e.chain.insert(0, key)
                raise

            tag.name = key
            if key in tags:
                _release(tags[key])
            tags[key] = tag

        for tag in self._value.values():
            _release(tag)
        self._value = tags

    def pretty_value(self):
        return f'{len(self.value)} entries'

    def pretty(self, key=None, indent=0, raw=False):
        lines = [super().pretty(key=key, indent=indent, raw=raw)]
        if not raw:
            lines.append('\t' * indent + '{')

        for name, tag in self.value.items():
            lines.append(tag.pretty(key=name, indent=indent + 1, raw=raw))

        if not raw:
            lines.append('\t' * indent + '}')

        return '\n'.join(lines)
