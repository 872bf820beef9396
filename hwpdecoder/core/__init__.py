# hwpdecoder/core/__init__.py
"""
Core - 문서 처리 핵심 모듈

- processor: 문서 형식별 핸들러와 헬퍼
"""
