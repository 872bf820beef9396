# hwpdecoder/core/processor/hwp5_helper/hwp5_assembler.py
"""
HWP 5.0 Document Assembler

Turns an opened container into a Document:
1. FileHeader: signature, version, flags
2. DocInfo: decompress, build tree, decode ID tables (ID_MAPPINGS first)
3. BodyText/Section0..N-1: decompress, build tree, decode every record,
   build paragraph views (optionally fanned out over a thread pool)
4. Auxiliary streams (optional, never fatal)

Required streams raise; lower-layer errors propagate unchanged.

Usage:
    config = HwpParserConfig(max_workers=4)
    document = parse_hwp(file_data, config)
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    STREAM_FILE_HEADER,
    STREAM_DOC_INFO,
    STORAGE_VIEW_TEXT,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_bodytext import Section, decode_section
from hwpdecoder.core.processor.hwp5_helper.hwp5_container import HwpContainer
from hwpdecoder.core.processor.hwp5_helper.hwp5_decoder import decompress_section
from hwpdecoder.core.processor.hwp5_helper.hwp5_docinfo import DocInfo, parse_doc_info
from hwpdecoder.core.processor.hwp5_helper.hwp5_document import Document, build_paragraphs
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import (
    RequiredStreamMissing,
    UnexpectedValue,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_fileheader import FileHeader, parse_file_header
from hwpdecoder.core.processor.hwp5_helper.hwp5_metadata import AuxiliaryStreams, read_auxiliary_streams

logger = logging.getLogger("document-processor.HWP5")


@dataclass
class HwpParserConfig:
    """Configuration for the HWP 5.0 parser."""
    max_workers: int = 1                        # >1: decode sections in a thread pool
    parse_auxiliary_streams: bool = True
    load_bin_data: bool = False                 # read and decompress BinData payloads
    section_count_hint: Optional[int] = None    # overrides DocumentProperties.area_count


class DocumentAssembler:
    """
    Assembles a Document from an HwpContainer.

    Usage:
        with HwpContainer.open(data) as container:
            document = DocumentAssembler(config).assemble(container)
    """

    def __init__(self, config: Optional[HwpParserConfig] = None):
        self.config = config or HwpParserConfig()

    def assemble(self, container: HwpContainer) -> Document:
        """
        Decode every stream of the container.

        Raises:
            RequiredStreamMissing: FileHeader, DocInfo or a declared section is absent
            UnexpectedValue: document is password protected or a distribution document
            HwpError: any lower-layer failure, unchanged
        """
        header = self.read_file_header(container)
        doc_info = self.read_doc_info(container, header)
        sections = self.read_sections(container, header, doc_info)

        auxiliary = AuxiliaryStreams()
        if self.config.parse_auxiliary_streams:
            auxiliary = read_auxiliary_streams(container, header, doc_info, self.config.load_bin_data)

        document = Document(header, doc_info, sections, auxiliary)
        logger.info(f"HWP {header.version_string}: {len(sections)} sections, "
                    f"{sum(len(s.paragraphs) for s in sections)} paragraphs")
        return document

    # ------------------------------------------------------------------
    # Required streams
    # ------------------------------------------------------------------

    def _read_required(self, container: HwpContainer, path: str) -> bytes:
        if not container.exists(path):
            raise RequiredStreamMissing(path)
        return container.read_stream(path)

    def read_file_header(self, container: HwpContainer) -> FileHeader:
        header = parse_file_header(self._read_required(container, STREAM_FILE_HEADER))
        if header.password_encrypted:
            raise UnexpectedValue("document_flags.password", False, True)
        if header.distributed:
            # Body lives encrypted in ViewText/SectionN
            logger.warning(f"Distribution document: "
                           f"{len(container.section_names(STORAGE_VIEW_TEXT))} encrypted "
                           f"{STORAGE_VIEW_TEXT} sections not decoded")
            raise UnexpectedValue("document_flags.distribution", False, True)
        return header

    def read_doc_info(self, container: HwpContainer, header: FileHeader) -> DocInfo:
        raw = self._read_required(container, STREAM_DOC_INFO)
        data = decompress_section(raw, header.compressed)
        logger.debug(f"DocInfo: {len(raw)} bytes -> {len(data)} bytes")
        return parse_doc_info(data, header.version)

    def section_count(self, container: HwpContainer, doc_info: DocInfo) -> int:
        if self.config.section_count_hint is not None:
            return self.config.section_count_hint
        declared = doc_info.section_count
        found = len(container.section_names())
        if found > declared:
            logger.warning(f"{found} section streams found, {declared} declared; reading {declared}")
        return declared

    def read_sections(
        self,
        container: HwpContainer,
        header: FileHeader,
        doc_info: DocInfo,
    ) -> Tuple[Section, ...]:
        """
        Decode BodyText/Section0..N-1 in order.

        Streams are read on the calling thread; decompression and decoding
        run on the pool when max_workers > 1. Results keep section order.
        """
        count = self.section_count(container, doc_info)
        raw_sections: List[Tuple[int, str, bytes]] = []
        for index in range(count):
            path = container.section_path(index)
            if not container.exists(path):
                if index > 0:
                    logger.warning(f"Declared section {path} is missing")
                raise RequiredStreamMissing(path)
            raw_sections.append((index, path, container.read_stream(path)))

        def decode(item: Tuple[int, str, bytes]) -> Section:
            index, path, raw = item
            data = decompress_section(raw, header.compressed)
            section = decode_section(data, index, header.version, path)
            return replace(section, paragraphs=build_paragraphs(section, doc_info))

        workers = max(1, self.config.max_workers)
        if workers == 1 or len(raw_sections) < 2:
            return tuple(decode(item) for item in raw_sections)

        logger.debug(f"Decoding {len(raw_sections)} sections with {workers} workers")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return tuple(executor.map(decode, raw_sections))


def parse_hwp(data: bytes, config: Optional[HwpParserConfig] = None) -> Document:
    """
    Parse an HWP 5.0 file held in memory.

    Args:
        data: Complete file contents
        config: Parser configuration

    Returns:
        Document

    Raises:
        HwpError: file is not a readable HWP 5.0 document
    """
    with HwpContainer.open(data) as container:
        return DocumentAssembler(config).assemble(container)


__all__ = [
    'HwpParserConfig',
    'DocumentAssembler',
    'parse_hwp',
]
