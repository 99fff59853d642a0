"""
ツール応答の _metadata ブロック
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..config import STALENESS_THRESHOLD_DAYS

DISCLAIMER = (
    "This data is derived from the e-Gov Law Portal (laws.e-gov.go.jp) and Japanese Law Translation "
    "(japaneselawtranslation.go.jp). The Japanese text is the sole legally authoritative version. "
    "English translations are reference translations published by the Ministry of Justice. "
    "Verify against official publications when legal certainty is required."
)
SOURCE_AUTHORITY = "Digital Agency (デジタル庁) / Ministry of Justice (法務省), Government of Japan"


def describe_freshness(built_at: Optional[str], now: Optional[datetime] = None) -> str:
    """
    built_at（ISO 8601）からデータの鮮度を表す文を作る

    Examples:
        >>> describe_freshness(None)
        'Database freshness unknown'
    """
    if not built_at or built_at == "unknown":
        return "Database freshness unknown"
    try:
        built = datetime.fromisoformat(built_at)
    except ValueError:
        return "Database freshness unknown"
    if built.tzinfo is None:
        built = built.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    days = (now - built).days
    if days > STALENESS_THRESHOLD_DAYS:
        return f"WARNING: Database is {days} days old. Data may be outdated."
    return f"Database built {days} day(s) ago."


def generate_response_metadata(store=None) -> Dict[str, str]:
    built_at = store.meta("built_at") if store is not None else None
    return {
        "data_freshness": describe_freshness(built_at),
        "disclaimer": DISCLAIMER,
        "source_authority": SOURCE_AUTHORITY,
    }


def tool_response(results: Any, store=None) -> Dict[str, Any]:
    """{"results": ..., "_metadata": ...} 形式に包む"""
    return {
        "results": results,
        "_metadata": generate_response_metadata(store),
    }
