# hwpdecoder/core/processor/hwp5_handler.py
"""
HWP5 Handler - HWP 5.0 OLE Format File Processor

Class-based entry point for HWP 5.0 files. Checks the file signature
and decodes the document with DocumentAssembler.

Config keys (all optional):
- max_workers: section decoding threads (default 1)
- parse_auxiliary_streams: read summary, preview, scripts, ... (default True)
- load_bin_data: read BinData payloads (default False)
- section_count_hint: override the declared section count
"""
import logging
from typing import Any, Dict, Optional

from hwpdecoder.core.processor.hwp5_helper import (
    Document,
    HwpContainer,
    HwpParserConfig,
    DocumentAssembler,
    ContainerError,
    check_file_signature,
)

logger = logging.getLogger("document-processor.HWP5")


class HWP5Handler:
    """HWP 5.0 OLE Format File Processing Handler Class"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self._config = config or {}
        self._parser_config = self._build_parser_config(self._config)
        self._logger = logging.getLogger(f"document-processor.{self.__class__.__name__}")

    @staticmethod
    def _build_parser_config(config: Dict[str, Any]) -> HwpParserConfig:
        """HwpParserConfig from the known keys of ``config``; other keys are ignored."""
        parser_config = HwpParserConfig()
        for key in ('max_workers', 'parse_auxiliary_streams', 'load_bin_data', 'section_count_hint'):
            if key in config:
                setattr(parser_config, key, config[key])
        return parser_config

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def parser_config(self) -> HwpParserConfig:
        return self._parser_config

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def parse(self, file_data: bytes) -> Document:
        """
        Decode an HWP 5.0 file.

        Args:
            file_data: Complete file contents

        Returns:
            Document

        Raises:
            ContainerError: data is not an OLE container (HWP 3.0 and HWPX
                files are reported by name)
            HwpError: any decoding failure
        """
        file_type = check_file_signature(file_data)
        if file_type != "OLE":
            kind = {"HWP_LEGACY": "HWP 2.0/3.0", "ZIP": "HWPX"}.get(file_type, "unknown")
            raise ContainerError(f"not an HWP 5.0 OLE file ({kind} format)")

        with HwpContainer.open(file_data) as container:
            return DocumentAssembler(self._parser_config).assemble(container)


__all__ = ['HWP5Handler']
