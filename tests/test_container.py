# tests/test_container.py
"""OLE container access tests."""
import pytest

from hwpdecoder.core.processor.hwp5_helper.hwp5_container import (
    MINIMAL_CONTAINER_SIZE,
    HwpContainer,
    check_file_signature,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import (
    ContainerError,
    StreamNotFound,
)

from helpers import build_cfb, file_header


@pytest.fixture
def container_data():
    return build_cfb({
        'FileHeader': file_header(),
        'DocInfo': b'\x01\x02\x03',
        'BodyText/Section0': b'zero',
        'BodyText/Section2': b'two',
        'BodyText/Section10': b'ten',
        'BodyText/Notes': b'not a section',
        'BinData/BIN0001.png': b'\x89PNG' + bytes(5000),
    })


class TestSignature:
    def test_ole(self, container_data):
        """Compound files are reported as OLE."""
        assert check_file_signature(container_data) == "OLE"

    def test_legacy_hwp(self):
        """HWP 3.0 files start with the signature text."""
        data = b'HWP Document File V3.00 \x1a\x01\x02\x03\x04\x05'.ljust(64, b'\x00')
        assert check_file_signature(data) == "HWP_LEGACY"

    def test_zip(self):
        """HWPX is a zip package."""
        assert check_file_signature(b'PK\x03\x04' + bytes(60)) == "ZIP"

    def test_unknown(self):
        """Short or unrecognized data gives None."""
        assert check_file_signature(b'PK\x03\x04') is None
        assert check_file_signature(bytes(64)) is None


class TestHwpContainer:
    def test_read_streams(self, container_data):
        """Streams are read whole by path."""
        with HwpContainer.open(container_data) as container:
            assert container.read_stream('DocInfo') == b'\x01\x02\x03'
            assert container.read_stream('BodyText/Section2') == b'two'
            assert container.read_stream(['BodyText', 'Section10']) == b'ten'

    def test_large_stream(self, container_data):
        """Streams above the mini stream cutoff come from regular sectors."""
        with HwpContainer.open(container_data) as container:
            data = container.read_stream('BinData/BIN0001.png')
        assert data[:4] == b'\x89PNG'
        assert len(data) == 5004

    def test_exists(self, container_data):
        """exists() is true for streams only."""
        with HwpContainer.open(container_data) as container:
            assert container.exists('FileHeader')
            assert container.exists('BodyText/Section0')
            assert not container.exists('BodyText')
            assert not container.exists('PrvText')
            assert not container.exists('a/b/c')
            assert not container.exists('')

    def test_missing_stream(self, container_data):
        """Reading an absent stream raises StreamNotFound."""
        with HwpContainer.open(container_data) as container:
            with pytest.raises(StreamNotFound) as exc_info:
                container.read_stream('BodyText/Section1')
        assert exc_info.value.path == 'BodyText/Section1'

    def test_list_streams(self, container_data):
        """Listing, optionally restricted to one storage."""
        with HwpContainer.open(container_data) as container:
            assert 'FileHeader' in container.list_streams()
            assert container.list_streams('BinData') == ['BinData/BIN0001.png']

    def test_section_names_numeric_order(self, container_data):
        """Section2 sorts before Section10; other names are ignored."""
        with HwpContainer.open(container_data) as container:
            assert container.section_names() == [
                'BodyText/Section0',
                'BodyText/Section2',
                'BodyText/Section10',
            ]
            assert container.section_path(3) == 'BodyText/Section3'

    def test_too_small(self):
        """Buffers below the minimal container size are rejected."""
        with pytest.raises(ContainerError) as exc_info:
            HwpContainer.open(b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1' + bytes(100))
        assert str(MINIMAL_CONTAINER_SIZE) in exc_info.value.reason

    def test_bad_magic(self):
        """Magic number is checked before olefile sees the data."""
        with pytest.raises(ContainerError) as exc_info:
            HwpContainer.open(bytes(MINIMAL_CONTAINER_SIZE))
        assert 'magic' in exc_info.value.reason
