import logging

from .enum import TagID
from .exceptions import InvalidTagIDException


logger = logging.getLogger(__name__)


class Meta(object):
    """Class containing metadata about the tag kinds"""

    def __init__(self):
        self.tags = {}

    def register(self, tag_id, cls):
        if tag_id in self.tags:
            raise AttributeError(f'tag id {tag_id!r} is already used by class {self.tags[tag_id].__name__}')

        logger.debug('registering \'%s\' for %r' % (cls.__name__, tag_id))
        self.tags[tag_id] = cls

    def lookup(self, tag_id):
        try:
            return self.tags[TagID(tag_id)]
        except (ValueError, KeyError):
            raise InvalidTagIDException(chain=[], msg=f'invalid tag id {tag_id}')


class MetaTag(type):
    '''Every class defining a "tag_id" attribute ends up in the table shared
    by the decoding of lists and compounds, so that adding a kind of tag is
    only a matter of subclassing.'''

    _meta = Meta()

    def __new__(cls, name, bases, attrs):
        new_cls = super(MetaTag, cls).__new__(cls, name, bases, attrs)

        tag_id = attrs.get('tag_id')
        if tag_id is not None:
            cls._meta.register(tag_id, new_cls)

        return new_cls


def tag_class_from_id(tag_id):
    return MetaTag._meta.lookup(tag_id)


def create_tag(tag_id, father=None):
    '''Produce an empty tag of the kind identified by tag_id, ready to be unpacked.'''
    tag_cls = tag_class_from_id(tag_id)
    if tag_cls.tag_id == TagID.END:
        raise InvalidTagIDException(chain=[], msg='an end tag cannot be used as a value')

    return tag_cls(father=father)
