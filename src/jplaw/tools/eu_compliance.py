"""
validate_eu_compliance: 法令（条）の EU 法参照・十分性認定の状況を確認
"""
from typing import Any, Dict, List, Optional

from ..utils.numerals import parse_article_number
from .metadata import tool_response

COMPLIANT = "compliant"
PARTIAL = "partial"
NOT_APPLICABLE = "not_applicable"


def validate_eu_compliance_tool(
    store,
    document_id: str,
    provision_ref: Optional[str] = None,
    eu_document_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Raises:
        ValueError: document_id が空、法令または条が見つからない場合
    """
    if not document_id or not document_id.strip():
        raise ValueError("document_id is required")

    resolved_id = store.resolve_statute_id(document_id)
    if resolved_id is None:
        raise ValueError(f'Document "{document_id}" not found in database')

    provision_id = None
    if provision_ref and provision_ref.strip():
        row = store.get_provision(resolved_id, parse_article_number(provision_ref))
        if row is None:
            raise ValueError(f'Provision "{provision_ref}" not found in {resolved_id}')
        provision_id = row["provision_id"]

    rows = store.eu_references(resolved_id, provision_id, eu_document_id)

    warnings: List[str] = []
    recommendations: List[str] = []

    has_adequacy = any(
        r["reference_type"] == "adequacy_decision" or "adequacy" in (r["title"] or "").lower()
        for r in rows
    )
    primary_count = sum(1 for r in rows if r["is_primary_implementation"] == 1)

    if not rows:
        status = NOT_APPLICABLE
        recommendations.append(
            "No EU references found. If this statute relates to EU adequacy, consider adding EU references."
        )
    elif primary_count == 0:
        status = PARTIAL
        warnings.append("EU references exist, but none are marked as primary implementation.")
        recommendations.append("Review reference quality and mark the primary adequacy links.")
    else:
        status = COMPLIANT

    results: Dict[str, Any] = {
        "document_id": resolved_id,
        "compliance_status": status,
        "eu_references_found": len(rows),
        "adequacy_decision": has_adequacy,
        "warnings": warnings,
    }
    if provision_ref:
        results["provision_ref"] = provision_ref
    if recommendations:
        results["recommendations"] = recommendations

    return tool_response(results, store)
