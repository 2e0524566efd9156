class NBTException(Exception):
    '''Base class to extend in order to throw exception in nbtstruct.

    It takes as first argument the chain of the layers that caused the
    exception: the compound keys and the list positions (as "[n]") from the
    outermost container down to the failing tag. Containers prepend their
    own component while the exception travels up.
    '''

    def __init__(self, chain, msg=''):
        self.chain = chain
        self.msg = msg
        super().__init__(msg)

    @property
    def location(self):
        location = ''
        for component in self.chain:
            if component.startswith('[') or not location:
                location += component
            else:
                location += '.' + component

        return location

    def __str__(self):
        if not self.chain:
            return self.msg

        return f'{self.msg} (at \'{self.location}\')'


class StreamException(NBTException):
    '''The underlying source cannot be read or the destination written.'''
    pass


class TruncatedException(NBTException):
    pass


class InvalidTagIDException(NBTException, ValueError):
    pass


class TypeMismatchException(NBTException, TypeError):
    pass


class IndexOutOfRangeException(NBTException, IndexError):
    pass


class NestingTooDeepException(NBTException):
    pass


class EncodingException(NBTException):
    pass


class NotFoundException(NBTException, KeyError):
    pass
