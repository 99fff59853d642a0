"""
Citation Validator

引用された法令・条文が文書ストアに実在するかを確認する。
ストアは DocumentLookup として呼び出し側から渡す。
ストア側の障害（接続不能など）はそのまま呼び出し側へ伝播する。
"""
import logging
from typing import List, Optional, Protocol

from .parser import parse_citation
from .types import DocumentRecord, ValidationResult

logger = logging.getLogger(__name__)

REPEALED_STATUS = "repealed"


class DocumentLookup(Protocol):
    """文書・条文の存在確認を提供するストア"""

    def find_document(self, term: str) -> Optional[DocumentRecord]:
        """ID・題名（部分一致）で法令を最大1件返す"""
        ...

    def provision_exists(self, document_id: str, article: str) -> bool:
        """art-<n> / section=<n> / art-<n> 前方一致のいずれかで条文があるか"""
        ...


def validate_citation(lookup: DocumentLookup, citation: str) -> ValidationResult:
    """
    引用を解析し、法令と条文の実在を確認

    Args:
        lookup: 文書ストア
        citation: 引用文字列

    Returns:
        ValidationResult。警告は 廃止 → 法令なし/条文なし の順に並ぶ
    """
    parsed = parse_citation(citation)

    if not parsed.valid:
        return ValidationResult(
            citation=parsed,
            document_exists=False,
            provision_exists=False,
            warnings=(parsed.error or 'Invalid citation format',),
        )

    search_term = parsed.title or parsed.title_en or ''
    doc = lookup.find_document(search_term)

    if doc is None:
        logger.info(f"Document not found for citation: {search_term}")
        return ValidationResult(
            citation=parsed,
            document_exists=False,
            provision_exists=False,
            warnings=(f'Document "{search_term}" not found in database',),
        )

    warnings: List[str] = []
    if doc.status == REPEALED_STATUS:
        warnings.append('This statute has been repealed')

    provision_exists = False
    if parsed.article:
        provision_exists = lookup.provision_exists(doc.id, parsed.article)
        if not provision_exists:
            warnings.append(f"Article {parsed.article} not found in {doc.title}")

    return ValidationResult(
        citation=parsed,
        document_exists=True,
        provision_exists=provision_exists,
        document_title=doc.title,
        status=doc.status,
        warnings=tuple(warnings),
    )
