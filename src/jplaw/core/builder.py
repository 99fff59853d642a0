"""
DatabaseBuilder: YAML シードファイルから SQLite データベースを構築

シード形式（1ファイル1法令）:

    id: act-57-2003
    type: statute
    title: 個人情報の保護に関する法律
    title_en: Act on the Protection of Personal Information
    short_name: APPI
    law_number: 平成十五年法律第五十七号
    status: in_force
    provisions:
      - provision_ref: art-17
        section: "17"
        chapter: 第四章
        title: （利用目的の特定）
        content: ...
"""
import sqlite3
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import yaml
from tqdm import tqdm

from .schema import SCHEMA, SCHEMA_VERSION

logger = logging.getLogger(__name__)

EU_DOCUMENTS = [
    {
        "id": "regulation:2016/679", "type": "regulation", "year": 2016, "number": 679,
        "celex_number": "32016R0679",
        "title": "Regulation (EU) 2016/679 of the European Parliament and of the Council "
                 "(General Data Protection Regulation)",
        "short_name": "GDPR",
        "url_eur_lex": "https://eur-lex.europa.eu/eli/reg/2016/679/oj",
    },
    {
        "id": "decision:2019/419", "type": "decision", "year": 2019, "number": 419,
        "celex_number": "32019D0419",
        "title": "Commission Implementing Decision (EU) 2019/419 pursuant to Regulation (EU) 2016/679 "
                 "on the adequate protection of personal data by Japan",
        "short_name": "EU-Japan Adequacy Decision",
        "url_eur_lex": "https://eur-lex.europa.eu/eli/dec_impl/2019/419/oj",
    },
    {
        "id": "directive:2016/1148", "type": "directive", "year": 2016, "number": 1148,
        "celex_number": "32016L1148",
        "title": "Directive (EU) 2016/1148 concerning measures for a high common level of security "
                 "of network and information systems (NIS Directive)",
        "short_name": "NIS Directive",
        "url_eur_lex": "https://eur-lex.europa.eu/eli/dir/2016/1148/oj",
    },
]

# (法令の特定条件, EU 文書ID, 参照種別, 引用, 文脈, 主要実装か)
EU_REFERENCES = [
    (
        ("APPI", "%個人情報%"), "regulation:2016/679", "adequacy_decision",
        "GDPR (Regulation 2016/679)",
        "Japan received an EU adequacy decision (2019/419) recognizing APPI as providing adequate "
        "personal data protection.",
        1,
    ),
    (
        ("APPI", "%個人情報%"), "decision:2019/419", "adequacy_decision",
        "EU-Japan Adequacy Decision (2019/419)",
        "Commission Implementing Decision (EU) 2019/419 establishing that Japan ensures an adequate "
        "level of protection of personal data under APPI, as supplemented by the Supplementary Rules.",
        1,
    ),
    (
        ("Cybersecurity Basic Act", "%サイバーセキュリティ%"), "directive:2016/1148", "references",
        "NIS Directive (2016/1148)",
        "The Cybersecurity Basic Act addresses concerns similar to the NIS Directive, "
        "though it is not a direct implementation.",
        0,
    ),
]


def load_seed_file(path: Path) -> Dict[str, Any]:
    """シードファイルを読み込む（必須キー: id, title）"""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Seed file must contain a mapping: {path}")
    missing = [key for key in ("id", "title") if not data.get(key)]
    if missing:
        raise ValueError(f"Seed file {path} is missing required fields: {missing}")
    return data


class DatabaseBuilder:
    def __init__(self, seed_dir: Path, db_path: Path):
        self.seed_dir = Path(seed_dir)
        self.db_path = Path(db_path)

    def _seed_files(self) -> List[Path]:
        if not self.seed_dir.exists():
            return []
        return sorted(
            p for p in self.seed_dir.iterdir()
            if p.suffix in (".yaml", ".yml")
        )

    def build(self) -> Dict[str, int]:
        """
        データベースを作り直す

        Returns:
            {"documents": n, "provisions": n, "eu_documents": n, "eu_references": n}
        """
        print(f"Building database at {self.db_path}")
        if self.db_path.exists():
            self.db_path.unlink()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            conn.executescript(SCHEMA)
            self._write_metadata(conn)

            seed_files = self._seed_files()
            if not seed_files:
                logger.warning(f"No seed files found in {self.seed_dir}. Creating empty database.")

            docs = [load_seed_file(p) for p in tqdm(seed_files, desc="Loading seeds")]
            with conn:
                for doc in docs:
                    self._insert_document(conn, doc)
                self._insert_eu_references(conn)

            stats = {
                table: conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
                for table in ("legal_documents", "legal_provisions", "eu_documents", "eu_references")
            }
        finally:
            conn.close()

        print(
            f"Done: {stats['legal_documents']} documents, {stats['legal_provisions']} provisions, "
            f"{stats['eu_documents']} EU documents"
        )
        return {
            "documents": stats["legal_documents"],
            "provisions": stats["legal_provisions"],
            "eu_documents": stats["eu_documents"],
            "eu_references": stats["eu_references"],
        }

    def _write_metadata(self, conn: sqlite3.Connection) -> None:
        built_at = datetime.now(timezone.utc).isoformat()
        with conn:
            conn.executemany(
                "INSERT INTO db_metadata (key, value) VALUES (?, ?)",
                [
                    ("schema_version", SCHEMA_VERSION),
                    ("tier", "free"),
                    ("jurisdiction", "JP"),
                    ("built_at", built_at),
                    ("builder", "jplaw build-db"),
                ],
            )

    def _insert_document(self, conn: sqlite3.Connection, doc: Dict[str, Any]) -> None:
        conn.execute(
            """
            INSERT OR REPLACE INTO legal_documents
              (id, title, title_en, short_name, law_number, type, status,
               issued_date, in_force_date, url, description)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                doc["id"], doc["title"], doc.get("title_en"), doc.get("short_name"),
                doc.get("law_number"), doc.get("type", "statute"), doc.get("status", "in_force"),
                doc.get("issued_date"), doc.get("in_force_date"),
                doc.get("url"), doc.get("description"),
            ),
        )

        for idx, prov in enumerate(doc.get("provisions") or []):
            section = str(prov["section"])
            conn.execute(
                """
                INSERT INTO legal_provisions
                  (document_id, provision_ref, part, chapter, section, title,
                   content, content_en, language, order_index)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    doc["id"], prov.get("provision_ref") or f"art-{section}",
                    prov.get("part"), prov.get("chapter"), section, prov.get("title"),
                    prov.get("content", ""), prov.get("content_en"),
                    prov.get("language", "ja"), prov.get("order_index", idx),
                ),
            )

    def _insert_eu_references(self, conn: sqlite3.Connection) -> None:
        for eu_doc in EU_DOCUMENTS:
            conn.execute(
                """
                INSERT OR REPLACE INTO eu_documents
                  (id, type, year, number, community, celex_number, title, short_name, url_eur_lex)
                VALUES (?, ?, ?, ?, 'EU', ?, ?, ?, ?)
                """,
                (
                    eu_doc["id"], eu_doc["type"], eu_doc["year"], eu_doc["number"],
                    eu_doc["celex_number"], eu_doc["title"], eu_doc["short_name"], eu_doc["url_eur_lex"],
                ),
            )

        for (short_name, title_like), eu_id, ref_type, citation, context, primary in EU_REFERENCES:
            row = conn.execute(
                "SELECT id FROM legal_documents WHERE short_name = ? OR title LIKE ? LIMIT 1",
                (short_name, title_like),
            ).fetchone()
            if row is None:
                logger.debug(f"No document for EU reference {eu_id} ({short_name})")
                continue
            conn.execute(
                """
                INSERT INTO eu_references
                  (document_id, eu_document_id, reference_type, full_citation,
                   reference_context, is_primary_implementation)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (row[0], eu_id, ref_type, citation, context, primary),
            )
