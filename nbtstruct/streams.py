import io
import logging

from .exceptions import StreamException, TruncatedException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/path/file object to
    uniform its properties: mainly we need reads that never come back
    short without telling us.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj
        self._owned = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__})>'

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        try:
            self.obj = open(self.obj, 'rb')
        except OSError as e:
            raise StreamException(chain=[], msg=f'cannot open \'{self.obj}\': {e.strerror}') from e
        self._owned = True

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)
        self._owned = True

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def init_file(self):
        '''Anything else must be a file object'''
        if not hasattr(self.obj, 'read') and not hasattr(self.obj, 'write'):
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

    def close(self):
        '''Only what we opened is closed, the caller's file object is left alone.'''
        if self._owned:
            self.obj.close()

    def read(self, n=-1):
        try:
            return self.obj.read(n)
        except OSError as e:
            raise StreamException(chain=[], msg=f'read failed: {e}') from e

    def read_exactly(self, n):
        data = self.read(n)
        if len(data) != n:
            raise TruncatedException(
                chain=[],
                msg=f'truncated stream: expected {n} bytes, got {len(data)}')

        return data

    def read_byte(self):
        '''Return the next byte as integer or None at the end of the stream'''
        data = self.read(1)

        return data[0] if data else None

    def read_all(self):
        return self.read()

    def write(self, data):
        try:
            return self.obj.write(data)
        except OSError as e:
            raise StreamException(chain=[], msg=f'write failed: {e}') from e

    def getvalue(self):
        return self.obj.getvalue()
