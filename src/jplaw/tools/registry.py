"""
Tool registry

ツール定義（名前・説明・入力スキーマ）と呼び出しの振り分け。
トランスポート層は call_tool の戻り値をそのまま返せばよい。
"""
import json
import logging
import sqlite3
from typing import Any, Callable, Dict, List, Optional

from .eu_compliance import validate_eu_compliance_tool
from .format_citation import format_citation_tool
from .get_provision import get_provision_tool
from .list_sources import list_sources_tool
from .validate_citation import validate_citation_tool

logger = logging.getLogger(__name__)

TOOLS: List[Dict[str, Any]] = [
    {
        "name": "get_provision",
        "description": (
            "Retrieve the full text of a specific provision (article/条) from a Japanese statute, "
            "or all provisions (capped at 200) if no article is specified. "
            'Pass article as either Arabic numeral ("17") or Kanji ("第十七条"). '
            'Pass document_id as the internal ID (e.g., "act-57-2003"), Japanese title, or English title.'
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "document_id": {"type": "string", "description": "Statute identifier or title"},
                "article": {"type": "string", "description": 'Article number ("17" or "第十七条")'},
                "provision_ref": {
                    "type": "string",
                    "description": 'Direct provision reference (e.g., "art-17"). Takes precedence over article.',
                },
            },
            "required": ["document_id"],
        },
    },
    {
        "name": "list_sources",
        "description": (
            "Returns metadata about the data sources, database tier, schema version, build date, "
            "record counts, and known limitations."
        ),
        "input_schema": {"type": "object", "properties": {}},
    },
    {
        "name": "validate_citation",
        "description": (
            "Validate a Japanese legal citation against the database. Returns whether the cited statute "
            "and provision exist, plus warnings about repealed status. "
            'Supported formats: "第十七条 個人情報の保護に関する法律", '
            '"Article 17, Act on the Protection of Personal Information (Act No. 57 of 2003)", '
            '"Art. 17, APPI", "act-57-2003, art. 17".'
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "citation": {"type": "string", "description": "Citation to validate"},
            },
            "required": ["citation"],
        },
    },
    {
        "name": "format_citation",
        "description": (
            'Format a Japanese legal citation. Formats: "full", "short", "pinpoint", "japanese". '
            "Does NOT validate existence; use validate_citation for that."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "citation": {"type": "string", "description": "Citation string to format"},
                "format": {
                    "type": "string",
                    "enum": ["full", "short", "pinpoint", "japanese"],
                    "default": "full",
                },
            },
            "required": ["citation"],
        },
    },
    {
        "name": "validate_eu_compliance",
        "description": (
            "Check EU compliance/adequacy status for a Japanese statute or provision. "
            "Returns compliant, partial, or not_applicable."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "document_id": {"type": "string", "description": "Statute identifier or title"},
                "provision_ref": {"type": "string", "description": 'Optional provision (e.g., "24")'},
                "eu_document_id": {
                    "type": "string",
                    "description": 'Optional EU document (e.g., "regulation:2016/679")',
                },
            },
            "required": ["document_id"],
        },
    },
]


def _str_arg(args: Dict[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
    """文字列引数を取り出す（None は既定値、文字列以外は ValueError）"""
    value = args.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


HANDLERS: Dict[str, Callable[..., Dict[str, Any]]] = {
    "get_provision": lambda store, args: get_provision_tool(
        store,
        _str_arg(args, "document_id", ""),
        _str_arg(args, "article"),
        _str_arg(args, "provision_ref"),
    ),
    "list_sources": lambda store, args: list_sources_tool(store),
    "validate_citation": lambda store, args: validate_citation_tool(store, _str_arg(args, "citation", "")),
    "format_citation": lambda store, args: format_citation_tool(
        _str_arg(args, "citation", ""), _str_arg(args, "format") or "full"
    ),
    "validate_eu_compliance": lambda store, args: validate_eu_compliance_tool(
        store,
        _str_arg(args, "document_id", ""),
        _str_arg(args, "provision_ref"),
        _str_arg(args, "eu_document_id"),
    ),
}


def _error(message: str) -> Dict[str, Any]:
    return {
        "content": [{"type": "text", "text": f"Error: {message}"}],
        "isError": True,
    }


def call_tool(store, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    ツールを呼び出し、テキストコンテンツとして返す

    未知のツール・不正な引数・ツール内の例外はすべて isError=True の応答になる。
    """
    handler = HANDLERS.get(name)
    if handler is None:
        return _error(f'Unknown tool "{name}".')
    if arguments is not None and not isinstance(arguments, dict):
        return _error("arguments must be an object")

    try:
        result = handler(store, arguments or {})
    except (ValueError, sqlite3.Error) as e:
        logger.error(f"Tool {name} failed: {e}")
        return _error(str(e))
    except Exception as e:
        logger.exception(f"Unexpected error in tool {name}")
        return _error(f"{type(e).__name__}: {e}")

    return {
        "content": [{"type": "text", "text": json.dumps(result, ensure_ascii=False, indent=2)}],
    }
