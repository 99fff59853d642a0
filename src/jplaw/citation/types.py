"""
Citation data types

ParsedCitation はすべての解析経路が収束する正規形であり、
すべての整形処理の出発点となる。
"""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class CitationKind(str, Enum):
    """法令の種別"""
    STATUTE = "statute"                              # 法律
    CABINET_ORDER = "cabinet_order"                  # 政令
    MINISTERIAL_ORDINANCE = "ministerial_ordinance"  # 省令
    UNKNOWN = "unknown"


class CitationFormat(str, Enum):
    """引用の出力形式"""
    FULL = "full"          # Article 17, Act on ... (Act No. 57 of 2003)
    SHORT = "short"        # Art. 17, APPI
    PINPOINT = "pinpoint"  # Art. 17(1)
    JAPANESE = "japanese"  # 第十七条 個人情報の保護に関する法律


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class ParsedCitation:
    """
    正規化済みの引用

    article / paragraph / item は常に算用数字文字列で保持する。
    valid=False のときは kind=UNKNOWN と error 以外は設定されない。
    """
    valid: bool
    kind: CitationKind = CitationKind.UNKNOWN
    title: Optional[str] = None
    title_en: Optional[str] = None
    law_number: Optional[str] = None
    act_number: Optional[int] = None
    year: Optional[int] = None
    article: Optional[str] = None
    paragraph: Optional[str] = None
    item: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def invalid(cls, error: str) -> "ParsedCitation":
        return cls(valid=False, kind=CitationKind.UNKNOWN, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_none(asdict(self))
        data["kind"] = self.kind.value
        return data


@dataclass(frozen=True)
class DocumentRecord:
    """文書ストアが返す法令レコード"""
    id: str
    title: str
    title_en: Optional[str] = None
    status: str = "in_force"
    short_name: Optional[str] = None
    law_number: Optional[str] = None


@dataclass(frozen=True)
class ValidationResult:
    """引用の存在確認結果"""
    citation: ParsedCitation
    document_exists: bool
    provision_exists: bool
    document_title: Optional[str] = None
    status: Optional[str] = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "citation": self.citation.to_dict(),
            "document_exists": self.document_exists,
            "provision_exists": self.provision_exists,
            "document_title": self.document_title,
            "status": self.status,
            "warnings": list(self.warnings),
        }
        return _drop_none(data)
