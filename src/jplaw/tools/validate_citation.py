"""
validate_citation: 引用された法令・条文が実在するかを確認
"""
from typing import Any, Dict

from ..citation.formatter import format_citation
from ..citation.types import CitationFormat
from ..citation.validator import validate_citation
from .metadata import tool_response


def validate_citation_tool(store, citation: str) -> Dict[str, Any]:
    if not citation or not citation.strip():
        return tool_response({
            "citation": citation or "",
            "valid": False,
            "document_exists": False,
            "provision_exists": False,
            "warnings": ["Empty citation"],
        }, store)

    result = validate_citation(store, citation)
    parsed = result.citation

    results = result.to_dict()
    results["input"] = citation
    results["valid"] = result.document_exists and (result.provision_exists or not parsed.article)
    if parsed.valid:
        results["formatted_citation"] = format_citation(parsed, CitationFormat.FULL)
        results["formatted_japanese"] = format_citation(parsed, CitationFormat.JAPANESE)

    return tool_response(results, store)
