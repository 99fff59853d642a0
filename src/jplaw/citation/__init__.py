"""
jplaw 引用処理モジュール
"""

from .types import (
    CitationKind,
    CitationFormat,
    ParsedCitation,
    DocumentRecord,
    ValidationResult,
)
from .parser import CitationParser, parse_citation
from .formatter import format_citation
from .validator import DocumentLookup, validate_citation

__all__ = [
    'CitationKind',
    'CitationFormat',
    'ParsedCitation',
    'DocumentRecord',
    'ValidationResult',
    'CitationParser',
    'parse_citation',
    'format_citation',
    'DocumentLookup',
    'validate_citation',
]
