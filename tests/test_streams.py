import io

import pytest

from nbtstruct.streams import Stream
from nbtstruct.exceptions import StreamException, TruncatedException


def test_bytes_stream():
    stream = Stream(b'\x01\x02\x03\x04\x05')

    assert stream.read_exactly(1) == b'\x01'
    assert stream.read_byte() == 2
    assert stream.read_all() == b'\x03\x04\x05'
    assert stream.tell() == 5
    assert stream.read_byte() is None


def test_truncated_read():
    stream = Stream(b'\x01\x02')

    with pytest.raises(TruncatedException) as e:
        stream.read_exactly(4)

    assert 'expected 4 bytes, got 2' in str(e.value)


def test_file_stream(tmp_path):
    path = tmp_path / 'data.bin'
    path.write_bytes(b'\x01\x02\x03')

    with Stream(str(path)) as stream:
        assert stream.read_exactly(2) == b'\x01\x02'
        assert stream.read_all() == b'\x03'

    assert stream.obj.closed


def test_missing_file(tmp_path):
    with pytest.raises(StreamException):
        Stream(str(tmp_path / 'missing.dat'))


def test_caller_file_object_is_not_closed():
    obj = io.BytesIO()

    with Stream(obj) as stream:
        stream.write(b'\xca\xfe')

    assert not obj.closed
    assert obj.getvalue() == b'\xca\xfe'


def test_wrong_object():
    with pytest.raises(ValueError):
        Stream(42)
