# hwpdecoder/core/processor/__init__.py
"""
Processor - 문서 타입별 핸들러 모듈

핸들러 목록:
- hwp5_handler: HWP 5.0 (OLE) 문서 처리

헬퍼 모듈 (하위 디렉토리):
- hwp5_helper/: HWP 5.0 디코딩 헬퍼 (컨테이너, 레코드 트리, DocInfo, BodyText)
"""
from hwpdecoder.core.processor.hwp5_handler import HWP5Handler

__all__ = ["HWP5Handler"]
