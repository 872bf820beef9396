# tests/test_handler.py
"""HWP5Handler entry point."""
import pytest

from hwpdecoder import HWP5Handler
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import ContainerError


class TestParse:
    def test_parse(self, hwp_file):
        """OLE files decode to a Document."""
        document = HWP5Handler().parse(hwp_file)
        assert document.sections[0].paragraphs[1].text == 'World'

    def test_decode_only(self):
        """The handler returns the Document; rendering text is left to callers."""
        assert not hasattr(HWP5Handler, 'extract_text')
        assert HWP5Handler.parse.__annotations__['return'].__name__ == 'Document'

    def test_hwpx_rejected(self):
        """Zip packages are named in the error."""
        with pytest.raises(ContainerError) as exc_info:
            HWP5Handler().parse(b'PK\x03\x04' + bytes(60))
        assert 'HWPX' in exc_info.value.reason

    def test_legacy_rejected(self):
        """HWP 3.0 files are named in the error."""
        data = b'HWP Document File V3.00 \x1a\x01\x02\x03\x04\x05'.ljust(64, b'\x00')
        with pytest.raises(ContainerError) as exc_info:
            HWP5Handler().parse(data)
        assert 'HWP 2.0/3.0' in exc_info.value.reason

    def test_config_keys(self):
        """Known keys reach the parser config; others are ignored."""
        handler = HWP5Handler({'max_workers': 3, 'load_bin_data': True, 'unrelated': 1})
        assert handler.parser_config.max_workers == 3
        assert handler.parser_config.load_bin_data
        assert not hasattr(handler.parser_config, 'unrelated')
        assert handler.config['unrelated'] == 1

