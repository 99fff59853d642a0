"""
get_provision: 法令の条文を取得

article は算用数字（"17"）でも漢数字（"第十七条"）でもよい。
条を指定しない場合は全条文（最大 MAX_ALL_PROVISIONS 件）を返す。
"""
from typing import Any, Dict, Optional

from ..config import EGOV_LAW_URL
from ..utils.numerals import parse_article_number
from .metadata import tool_response

MAX_ALL_PROVISIONS = 200


def _to_result(row: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(row)
    document_url = result.pop("document_url", None)
    result.pop("provision_id", None)
    result["citation_url"] = document_url or f"{EGOV_LAW_URL}/{row['document_id']}"
    return result


def _normalize_ref(ref: str) -> str:
    """'art-17' / '第十七条' / '17' → '17'"""
    ref = ref.strip()
    if ref.lower().startswith("art-"):
        ref = ref[4:]
    return parse_article_number(ref)


def get_provision_tool(
    store,
    document_id: str,
    article: Optional[str] = None,
    provision_ref: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Raises:
        ValueError: document_id が空の場合
    """
    if not document_id or not document_id.strip():
        raise ValueError("document_id is required")

    resolved_id = store.resolve_statute_id(document_id) or document_id

    article_ref = provision_ref or article
    if article_ref and article_ref.strip():
        row = store.get_provision(resolved_id, _normalize_ref(article_ref))
        return tool_response(_to_result(row) if row else None, store)

    total = store.count_provisions(resolved_id)
    results = [_to_result(r) for r in store.list_provisions(resolved_id, MAX_ALL_PROVISIONS)]

    if total > MAX_ALL_PROVISIONS:
        return tool_response({
            "provisions": results,
            "truncated": True,
            "total": total,
        }, store)
    return tool_response(results, store)
