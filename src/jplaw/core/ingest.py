"""
Ingester: e-Gov 法令API から YAML シードファイルを生成

取得 → パース → <law_id>.yaml への書き出しを対象法令ごとに行う。
個々の法令の失敗はレポートに記録し、処理全体は止めない。
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
import yaml
from tqdm import tqdm

from ..client.egov import EGovClient
from ..config import EGOV_LAW_URL
from ..utils.statute_id import law_number_to_statute_id
from .law_parser import ParsedLaw, parse_law_xml

logger = logging.getLogger(__name__)

KEY_LAWS: List[Dict[str, str]] = [
    {"law_id": "415AC0000000057", "short_name": "APPI",
     "title_en": "Act on the Protection of Personal Information"},
    {"law_id": "426AC1000000104", "short_name": "Cybersecurity Basic Act",
     "title_en": "Cybersecurity Basic Act"},
    {"law_id": "359AC0000000086", "short_name": "Telecom Business Act",
     "title_en": "Telecommunications Business Act"},
    {"law_id": "417AC0000000086", "short_name": "Companies Act",
     "title_en": "Companies Act"},
    {"law_id": "411AC0000000128", "short_name": "Unauthorized Access Act",
     "title_en": "Act on Prohibition of Unauthorized Computer Access"},
    {"law_id": "425AC0000000027", "short_name": "My Number Act",
     "title_en": "Act on the Use of Numbers to Identify a Specific Individual in Administrative Procedures"},
    {"law_id": "321CONSTITUTION", "short_name": "Constitution",
     "title_en": "Constitution of Japan"},
]


def load_targets(path: Optional[Path]) -> List[Dict[str, str]]:
    """
    対象法令リストを読み込む

    受け付ける形式:
      - law_id の配列
      - {"targets": [...]}（要素は law_id 文字列 または {law_id, short_name, title_en}）
    """
    if path is None:
        return list(KEY_LAWS)
    if not path.exists():
        raise FileNotFoundError(f"Targets file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if isinstance(data, dict):
        data = data.get("targets", [])
    if not isinstance(data, list):
        return []

    targets = []
    for entry in data:
        if isinstance(entry, str):
            targets.append({"law_id": entry})
        elif isinstance(entry, dict) and entry.get("law_id"):
            targets.append(entry)
        else:
            logger.warning(f"Ignoring malformed target entry: {entry!r}")
    return targets


def build_seed(parsed: ParsedLaw, target: Dict[str, str]) -> Dict[str, Any]:
    """ParsedLaw をシード辞書に変換"""
    statute_id = law_number_to_statute_id(parsed.law_num) or parsed.law_id
    title_en = target.get("title_en")
    description = f"{title_en} ({parsed.law_num})" if title_en else parsed.law_num

    provisions = []
    for idx, article in enumerate(parsed.articles):
        provisions.append({
            "provision_ref": f"art-{article.number}",
            "part": article.part,
            "chapter": article.chapter,
            "section": article.number,
            "title": article.caption or None,
            "content": article.content,
            "content_en": None,
            "language": "ja",
            "order_index": idx,
        })

    return {
        "id": statute_id,
        "type": "statute",
        "title": parsed.law_name,
        "title_en": title_en,
        "short_name": target.get("short_name"),
        "law_number": parsed.law_num,
        "status": target.get("status", "in_force"),
        "url": f"{EGOV_LAW_URL}/{parsed.law_id}",
        "description": description,
        "provisions": provisions,
    }


class Ingester:
    def __init__(self, seed_dir: Path, targets_path: Optional[Path] = None,
                 client: Optional[EGovClient] = None):
        self.seed_dir = Path(seed_dir)
        self.targets = load_targets(targets_path)
        self.client = client or EGovClient()

    def ingest(self) -> Dict[str, Any]:
        """
        全対象法令を取り込む

        Returns:
            {"total_targets": n, "success": [law_id...], "failed": [{"id", "error"}...]}
        """
        self.seed_dir.mkdir(parents=True, exist_ok=True)
        print(f"Ingesting {len(self.targets)} laws from e-Gov...")

        report: Dict[str, Any] = {
            "total_targets": len(self.targets),
            "success": [],
            "failed": [],
        }

        for target in tqdm(self.targets, desc="Ingesting Laws"):
            law_id = target["law_id"]
            try:
                out_path = self._ingest_one(target)
                report["success"].append(law_id)
                logger.info(f"Wrote {out_path}")
            except (requests.RequestException, RuntimeError, ValueError) as e:
                logger.error(f"Failed to ingest {law_id}: {e}")
                report["failed"].append({"id": law_id, "error": str(e)})

        return report

    def _ingest_one(self, target: Dict[str, str]) -> Path:
        law_id = target["law_id"]
        xml = self.client.fetch_law_xml(law_id)
        parsed = parse_law_xml(law_id, xml)
        seed = build_seed(parsed, target)

        out_path = self.seed_dir / f"{law_id}.yaml"
        with open(out_path, "w", encoding="utf-8") as f:
            yaml.dump(seed, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
        return out_path
