# tests/test_decoder.py
"""Decompression tests."""
import zlib

import pytest

from hwpdecoder.core.processor.hwp5_helper.hwp5_decoder import (
    CompressionMode,
    decompress,
    decompress_auxiliary,
    decompress_bindata,
    decompress_optional,
    decompress_section,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import DecompressError

from helpers import deflate

PLAIN = 'HWP 본문 데이터'.encode('utf-16-le') * 8


class TestDecompress:
    def test_raw_deflate(self):
        """Raw deflate (no header) is the default framing."""
        assert decompress(deflate(PLAIN)) == PLAIN

    def test_zlib_framing(self):
        """zlib framed data needs CompressionMode.ZLIB."""
        assert decompress(zlib.compress(PLAIN), CompressionMode.ZLIB) == PLAIN

    def test_none_passthrough(self):
        """NONE returns the input unchanged."""
        assert decompress(b'abc', CompressionMode.NONE) == b'abc'

    def test_corrupt_data(self):
        """Invalid data raises DecompressError naming the framing."""
        with pytest.raises(DecompressError) as exc_info:
            decompress(b'\xff\xff\xff\xff', CompressionMode.ZLIB)
        assert exc_info.value.format == 'zlib'

    def test_truncated_data(self):
        """A stream cut before its end block is an error."""
        data = deflate(PLAIN)
        with pytest.raises(DecompressError) as exc_info:
            decompress(data[:len(data) // 2])
        assert exc_info.value.format == 'deflate'

    def test_section_follows_flag(self):
        """decompress_section inflates only when the document is compressed."""
        assert decompress_section(deflate(PLAIN), True) == PLAIN
        assert decompress_section(PLAIN, False) == PLAIN

    def test_bindata(self):
        """BinData payloads are raw deflate."""
        assert decompress_bindata(deflate(b'\x89PNG')) == b'\x89PNG'


class TestOptionalDecompress:
    def test_optional_failure_is_none(self):
        """Optional streams degrade to None."""
        assert decompress_optional(b'\x00garbage', CompressionMode.ZLIB, 'PrvText') is None

    def test_auxiliary_tries_deflate_then_zlib(self):
        """Auxiliary streams accept either framing."""
        assert decompress_auxiliary(deflate(PLAIN), 'Scripts/DefaultJScript') == PLAIN
        assert decompress_auxiliary(zlib.compress(PLAIN), 'Scripts/DefaultJScript') == PLAIN

    def test_auxiliary_failure_is_none(self):
        """Neither framing fitting gives None."""
        assert decompress_auxiliary(b'\xff\xff\xff\xff', 'Scripts/JScriptVersion') is None
