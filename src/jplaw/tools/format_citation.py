"""
format_citation: 引用を標準形式に整形（存在確認はしない）
"""
from typing import Any, Dict, Union

from ..citation.formatter import format_citation
from ..citation.parser import parse_citation
from ..citation.types import CitationFormat
from .metadata import tool_response


def format_citation_tool(
    citation: str,
    format: Union[CitationFormat, str] = CitationFormat.FULL,
) -> Dict[str, Any]:
    if not citation or not citation.strip():
        return tool_response({
            "input": "",
            "formatted": "",
            "formatted_japanese": "",
            "type": "unknown",
            "valid": False,
            "error": "Empty citation",
        })

    parsed = parse_citation(citation)
    if not parsed.valid:
        return tool_response({
            "input": citation,
            "formatted": citation,
            "formatted_japanese": "",
            "type": parsed.kind.value,
            "valid": False,
            "error": parsed.error,
        })

    return tool_response({
        "input": citation,
        "formatted": format_citation(parsed, format or CitationFormat.FULL),
        "formatted_japanese": format_citation(parsed, CitationFormat.JAPANESE),
        "type": parsed.kind.value,
        "valid": True,
    })
