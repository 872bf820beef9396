# tests/conftest.py
"""Shared fixtures: small HWP 5.0 documents built in memory."""
import pytest

from helpers import (
    DEFAULT_VERSION,
    build_hwp,
    doc_info_stream,
    paragraph,
    table_paragraph,
)


@pytest.fixture
def version():
    return DEFAULT_VERSION


@pytest.fixture
def doc_info_data():
    """DocInfo with one font per language, two char shapes, one para shape, one style."""
    return doc_info_stream(fonts=('Batang',), char_shapes=2, styles=('Normal',))


@pytest.fixture
def section_data():
    """Two paragraphs, then a paragraph owning a 2x2 table."""
    cells = [
        (0, 0, 1, 1, 'A1'),
        (1, 0, 1, 1, 'B1'),
        (0, 1, 1, 1, 'A2'),
        (1, 1, 1, 1, 'B2'),
    ]
    return (
        paragraph('Hello', shape_id=0)
        + paragraph('World', shape_id=1)
        + table_paragraph(cells, rows=2, cols=2)
    )


@pytest.fixture
def hwp_file(doc_info_data, section_data):
    """Compressed single-section document."""
    return build_hwp(doc_info_data, [section_data])


@pytest.fixture
def two_section_file(doc_info_data):
    """Compressed document with two sections."""
    doc_info = doc_info_stream(char_shapes=2, area_count=2)
    return build_hwp(doc_info, [paragraph('First'), paragraph('Second')])
