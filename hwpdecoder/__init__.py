# hwpdecoder/__init__.py
"""
HWP Decoder Library

한글(HWP 5.0) 바이너리 문서를 읽기 전용 Document 값으로 디코딩하는 라이브러리입니다.

패키지 구조:
- core: 문서 처리 핵심 모듈
    - processor: HWP5Handler 및 hwp5_helper (컨테이너, 레코드, DocInfo, BodyText)

사용 예시:
    from hwpdecoder import parse_hwp, HwpParserConfig

    with open("sample.hwp", "rb") as f:
        document = parse_hwp(f.read(), HwpParserConfig(max_workers=4))
    print(document.text)
"""

__version__ = "1.0.0"

# 핵심 클래스 최상위 노출
from hwpdecoder.core.processor.hwp5_helper import (
    parse_hwp,
    HwpParserConfig,
    Document,
    HwpError,
)
from hwpdecoder.core.processor.hwp5_handler import HWP5Handler

__all__ = [
    "__version__",
    "parse_hwp",
    "HwpParserConfig",
    "Document",
    "HwpError",
    "HWP5Handler",
]
