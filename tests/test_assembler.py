# tests/test_assembler.py
"""End-to-end document assembly."""
import logging

import pytest

from hwpdecoder import HwpParserConfig, parse_hwp
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import (
    RecordTreeParseError,
    RequiredStreamMissing,
    UnexpectedValue,
)

from helpers import (
    build_cfb,
    build_hwp,
    deflate,
    doc_info_stream,
    file_header,
    lpwstr,
    paragraph,
    property_set,
)


class TestParseHwp:
    def test_document(self, hwp_file):
        """Header, DocInfo and section paragraphs."""
        document = parse_hwp(hwp_file)
        assert document.header.version_string == '5.0.3.0'
        assert document.header.compressed
        assert len(document.sections) == 1
        assert [p.text for p in document.sections[0].paragraphs] == ['Hello', 'World', '']
        assert document.text == 'Hello\nWorld\n'
        assert len(document.doc_info.char_shapes) == 2

    def test_tables(self, hwp_file):
        """Tables reachable from the document."""
        document = parse_hwp(hwp_file)
        assert len(document.tables) == 1
        assert document.tables[0].to_rows() == [['A1', 'B1'], ['A2', 'B2']]

    def test_nested_paragraphs(self, hwp_file):
        """Nested iteration includes cell paragraphs."""
        document = parse_hwp(hwp_file)
        assert len(list(document.iter_paragraphs())) == 3
        assert len(list(document.iter_paragraphs(nested=True))) == 7

    def test_uncompressed(self, doc_info_data, section_data):
        """Streams are stored as-is when the compression flag is clear."""
        document = parse_hwp(build_hwp(doc_info_data, [section_data], compressed=False))
        assert not document.header.compressed
        assert document.sections[0].paragraphs[0].text == 'Hello'

    def test_two_sections(self, two_section_file):
        """Sections are separated by a blank line."""
        document = parse_hwp(two_section_file)
        assert [s.index for s in document.sections] == [0, 1]
        assert document.text == 'First\n\nSecond'

    def test_parallel_keeps_order(self):
        """Thread pool decoding returns sections in stream order."""
        texts = [f'Section {i}' for i in range(6)]
        data = build_hwp(doc_info_stream(area_count=6), [paragraph(t) for t in texts])
        document = parse_hwp(data, HwpParserConfig(max_workers=4))
        assert [s.paragraphs[0].text for s in document.sections] == texts
        assert [s.stream for s in document.sections] == [f'BodyText/Section{i}' for i in range(6)]

    def test_section_count_hint(self, two_section_file):
        """The hint overrides the declared count."""
        document = parse_hwp(two_section_file, HwpParserConfig(section_count_hint=1))
        assert len(document.sections) == 1

    def test_extra_section_streams_ignored(self, doc_info_data):
        """Only the declared sections are read."""
        data = build_hwp(doc_info_data, [paragraph('one'), paragraph('two')])
        document = parse_hwp(data)
        assert document.text == 'one'


class TestRequiredStreams:
    def test_missing_doc_info(self):
        """DocInfo is required."""
        data = build_cfb({'FileHeader': file_header(), 'BodyText/Section0': deflate(paragraph('x'))})
        with pytest.raises(RequiredStreamMissing) as exc_info:
            parse_hwp(data)
        assert exc_info.value.path == 'DocInfo'

    def test_missing_declared_section(self):
        """Every declared section must exist."""
        data = build_hwp(doc_info_stream(area_count=2), [paragraph('only')])
        with pytest.raises(RequiredStreamMissing) as exc_info:
            parse_hwp(data)
        assert exc_info.value.path == 'BodyText/Section1'

    def test_password_protected(self, doc_info_data, section_data):
        """Encrypted documents are refused."""
        data = build_hwp(doc_info_data, [section_data], flags=0x03)
        with pytest.raises(UnexpectedValue) as exc_info:
            parse_hwp(data)
        assert exc_info.value.field == 'document_flags.password'

    def test_distribution_document(self, doc_info_data, section_data):
        """Distribution documents keep their body in ViewText."""
        data = build_hwp(doc_info_data, [section_data], flags=0x05)
        with pytest.raises(UnexpectedValue) as exc_info:
            parse_hwp(data)
        assert exc_info.value.field == 'document_flags.distribution'

    def test_distribution_document_logs_view_text(self, doc_info_data, section_data, caplog):
        """The refusal names the encrypted storage."""
        data = build_hwp(doc_info_data, [section_data], flags=0x05)
        with caplog.at_level(logging.WARNING, logger='document-processor.HWP5'):
            with pytest.raises(UnexpectedValue):
                parse_hwp(data)
        assert any('ViewText sections not decoded' in r.getMessage() for r in caplog.records)

    def test_corrupt_section(self, doc_info_data):
        """A truncated section fails the parse."""
        data = build_hwp(doc_info_data, [paragraph('x')[:-3]])
        with pytest.raises(RecordTreeParseError):
            parse_hwp(data)


class TestAuxiliary:
    def test_summary_read(self, doc_info_data, section_data):
        """Summary information is attached to the document."""
        summary = property_set([(0x02, lpwstr('제목'))])
        data = build_hwp(doc_info_data, [section_data],
                         extra_streams={'\x05HwpSummaryInformation': summary})
        assert parse_hwp(data).summary_info.title == '제목'

    def test_auxiliary_disabled(self, doc_info_data, section_data):
        """parse_auxiliary_streams=False skips them all."""
        summary = property_set([(0x02, lpwstr('제목'))])
        data = build_hwp(doc_info_data, [section_data],
                         extra_streams={'\x05HwpSummaryInformation': summary})
        document = parse_hwp(data, HwpParserConfig(parse_auxiliary_streams=False))
        assert document.summary_info is None
        assert document.bin_data == ()

    def test_corrupt_optional_stream(self, doc_info_data, section_data):
        """A broken optional stream does not fail the parse."""
        data = build_hwp(doc_info_data, [section_data],
                         extra_streams={'\x05HwpSummaryInformation': b'\x00' * 64})
        document = parse_hwp(data)
        assert document.summary_info is None
        assert document.sections[0].paragraphs[0].text == 'Hello'
