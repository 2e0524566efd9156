import logging
import re
from typing import List, Union

from .core import CompoundTag, ListTag
from .fields import ArrayTag
from .exceptions import (
    NotFoundException,
    IndexOutOfRangeException,
    TypeMismatchException,
)


logger = logging.getLogger(__name__)


class TagPath:
    '''This makes it possible to point to a tag deep inside a tree.

    The syntax is inspired from attribute access in python, with indexes
    between square brackets for lists and arrays:

        Data.Player.Inventory[2].id

    It is resolved left to right. A component without a name addresses the
    empty name, so that '.Data' reaches the "Data" compound inside the root
    compound named '' that most files have; the empty expression is the tag
    itself. Names containing '.' or '[' cannot be expressed.
    '''
    _component = re.compile(r'^(?P<key>[^\[\]]*)(?P<indexes>(\[\d+\])*)$')
    _index = re.compile(r'\[(\d+)\]')

    def __init__(self, expression: str):
        self.expression = expression
        self.components = self._parse(expression)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def _parse(self, expression: str) -> List[Union[str, int]]:
        components: List[Union[str, int]] = []
        if expression == '':
            return components

        for part in expression.split('.'):
            match = self._component.match(part)
            if not match:
                raise ValueError(f'malformed component \'{part}\' in path \'{expression}\'')

            key, indexes = match.group('key'), match.group('indexes')
            if key or not indexes:
                components.append(key)

            components.extend(int(_) for _ in self._index.findall(indexes))

        return components

    def resolve(self, tag):
        '''Return the tag (or the integer, for an array element) at the end of the path.'''
        chain: List[str] = []

        for component in self.components:
            logger.debug(' resolving \'%s\' from %r' % (component, tag))

            if isinstance(component, int):
                if not isinstance(tag, (ListTag, ArrayTag)):
                    raise TypeMismatchException(chain=list(chain), msg=f'cannot index {tag!r}')
                try:
                    tag = tag[component]
                except IndexOutOfRangeException as e:
                    e.chain = chain + [f'[{component}]']
                    raise
                chain.append(f'[{component}]')
            else:
                if not isinstance(tag, CompoundTag):
                    raise TypeMismatchException(chain=list(chain), msg=f'cannot look up \'{component}\' in {tag!r}')
                try:
                    tag = tag[component]
                except NotFoundException as e:
                    e.chain = chain + [component]
                    raise
                chain.append(component)

        return tag
