"""
LawStore: SQLite 文書ストア

DocumentLookup（find_document / provision_exists）の実装に加え、
ツール層が使う条文取得・件数集計・EU 参照の問い合わせを提供する。
クエリはすべてパラメータ化する。
"""
import sqlite3
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..citation.types import DocumentRecord
from ..utils.statute_id import statute_id_candidates
from .schema import COUNTED_TABLES

logger = logging.getLogger(__name__)

_PROVISION_COLUMNS = """
    lp.id AS provision_id,
    lp.document_id,
    ld.title AS document_title,
    ld.title_en AS document_title_en,
    ld.status AS document_status,
    ld.url AS document_url,
    lp.provision_ref,
    lp.chapter,
    lp.section,
    lp.title,
    lp.content,
    lp.content_en,
    lp.language
"""


class LawStore:
    """読み取り専用の法令データベース"""

    def __init__(self, db_path: Union[str, Path], readonly: bool = True):
        self.db_path = Path(db_path)
        if readonly:
            # 存在しないファイルは sqlite3.OperationalError
            uri = f"{self.db_path.resolve().as_uri()}?mode=ro"
            self.conn = sqlite3.connect(uri, uri=True)
        else:
            self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "LawStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # DocumentLookup
    # ------------------------------------------------------------------

    def find_document(self, term: str) -> Optional[DocumentRecord]:
        """ID 完全一致、または題名・英語題名・略称の部分一致で1件"""
        pattern = f"%{term}%"
        row = self.conn.execute(
            """
            SELECT id, title, title_en, status, short_name, law_number
            FROM legal_documents
            WHERE title LIKE ? OR title_en LIKE ? OR short_name LIKE ? OR id = ?
            LIMIT 1
            """,
            (pattern, pattern, pattern, term),
        ).fetchone()
        if row is None:
            return None
        return DocumentRecord(**dict(row))

    def provision_exists(self, document_id: str, article: str) -> bool:
        row = self.conn.execute(
            """
            SELECT 1
            FROM legal_provisions
            WHERE document_id = ?
              AND (provision_ref = ? OR section = ? OR provision_ref LIKE ?)
            LIMIT 1
            """,
            (document_id, f"art-{article}", article, f"art-{article}%"),
        ).fetchone()
        return row is not None

    # ------------------------------------------------------------------
    # 法令ID 解決
    # ------------------------------------------------------------------

    def resolve_statute_id(self, input_id: str) -> Optional[str]:
        """
        入力を既存の法令IDに解決

        順序: ID 完全一致 → 法令番号 完全一致 → 題名 → 英語題名 → 略称（部分一致）
        """
        for candidate in statute_id_candidates(input_id):
            row = self.conn.execute(
                "SELECT id FROM legal_documents WHERE id = ? LIMIT 1", (candidate,)
            ).fetchone()
            if row:
                return row["id"]

        row = self.conn.execute(
            "SELECT id FROM legal_documents WHERE law_number = ? LIMIT 1", (input_id,)
        ).fetchone()
        if row:
            return row["id"]

        for column in ("title", "title_en", "short_name"):
            row = self.conn.execute(
                f"SELECT id FROM legal_documents WHERE {column} LIKE ? LIMIT 1",
                (f"%{input_id}%",),
            ).fetchone()
            if row:
                return row["id"]

        return None

    def get_document(self, document_id: str) -> Optional[Dict[str, Any]]:
        row = self.conn.execute(
            "SELECT * FROM legal_documents WHERE id = ?", (document_id,)
        ).fetchone()
        return dict(row) if row else None

    # ------------------------------------------------------------------
    # 条文
    # ------------------------------------------------------------------

    def get_provision(self, document_id: str, article: str) -> Optional[Dict[str, Any]]:
        """art-<n> / section=<n> / provision_ref=<n> で条文を1件取得"""
        row = self.conn.execute(
            f"""
            SELECT {_PROVISION_COLUMNS}
            FROM legal_provisions lp
            JOIN legal_documents ld ON ld.id = lp.document_id
            WHERE lp.document_id = ?
              AND (lp.provision_ref = ? OR lp.section = ? OR lp.provision_ref = ?)
            ORDER BY lp.order_index, lp.id
            LIMIT 1
            """,
            (document_id, f"art-{article}", article, article),
        ).fetchone()
        return dict(row) if row else None

    def list_provisions(self, document_id: str, limit: int) -> List[Dict[str, Any]]:
        rows = self.conn.execute(
            f"""
            SELECT {_PROVISION_COLUMNS}
            FROM legal_provisions lp
            JOIN legal_documents ld ON ld.id = lp.document_id
            WHERE lp.document_id = ?
            ORDER BY lp.order_index, lp.id
            LIMIT ?
            """,
            (document_id, limit),
        ).fetchall()
        return [dict(r) for r in rows]

    def count_provisions(self, document_id: str) -> int:
        row = self.conn.execute(
            "SELECT COUNT(*) AS count FROM legal_provisions WHERE document_id = ?",
            (document_id,),
        ).fetchone()
        return int(row["count"]) if row else 0

    # ------------------------------------------------------------------
    # メタデータ・件数
    # ------------------------------------------------------------------

    def count(self, table: str) -> int:
        """テーブル件数（テーブルがなければ 0）"""
        if table not in COUNTED_TABLES:
            raise ValueError(f"Unknown table: {table}")
        try:
            row = self.conn.execute(f"SELECT COUNT(*) AS count FROM {table}").fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Count failed for {table}: {e}")
            return 0
        return int(row["count"]) if row else 0

    def meta(self, key: str) -> str:
        """db_metadata の値（なければ 'unknown'）"""
        try:
            row = self.conn.execute(
                "SELECT value FROM db_metadata WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Metadata read failed for {key}: {e}")
            return "unknown"
        return row["value"] if row else "unknown"

    # ------------------------------------------------------------------
    # EU 参照
    # ------------------------------------------------------------------

    def eu_references(
        self,
        document_id: str,
        provision_id: Optional[int] = None,
        eu_document_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        sql = """
            SELECT ed.id, ed.type, ed.title, er.reference_type, er.is_primary_implementation
            FROM eu_documents ed
            JOIN eu_references er ON ed.id = er.eu_document_id
            WHERE er.document_id = ?
        """
        params: List[Any] = [document_id]
        if provision_id is not None:
            sql += " AND er.provision_id = ?"
            params.append(provision_id)
        if eu_document_id:
            sql += " AND ed.id = ?"
            params.append(eu_document_id)

        return [dict(r) for r in self.conn.execute(sql, params).fetchall()]
