from enum import IntEnum, Flag


class TagID(IntEnum):
    '''Numeric identifier of each kind of tag, as written on the wire.'''
    END        = 0
    BYTE       = 1
    SHORT      = 2
    INT        = 3
    LONG       = 4
    FLOAT      = 5
    DOUBLE     = 6
    BYTE_ARRAY = 7
    STRING     = 8
    LIST       = 9
    COMPOUND   = 10
    INT_ARRAY  = 11
    LONG_ARRAY = 12

    @property
    def label(self):
        '''Name used when displaying a tag, e.g. TAG_Byte_Array'''
        return 'TAG_' + '_'.join(_.capitalize() for _ in self.name.split('_'))


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE     = 0
    ENCODING = 1 << 0
    INHERIT  = 1 << 1


# used when no tag up the hierarchy says otherwise
DEFAULT_COMPLIANT = Compliant.ENCODING
