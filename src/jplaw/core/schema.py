"""
SQLite スキーマ定義

legal_documents / legal_provisions が法令本体、
eu_documents / eu_references が EU 法との相互参照（十分性認定など）。
"""

SCHEMA_VERSION = "1.0"

SCHEMA = """
-- Metadata
CREATE TABLE IF NOT EXISTS db_metadata (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);

-- Legal documents (statutes)
CREATE TABLE IF NOT EXISTS legal_documents (
  id TEXT PRIMARY KEY,
  title TEXT NOT NULL,
  title_en TEXT,
  short_name TEXT,
  law_number TEXT,
  type TEXT NOT NULL DEFAULT 'statute',
  status TEXT NOT NULL DEFAULT 'in_force',
  issued_date TEXT,
  in_force_date TEXT,
  url TEXT,
  description TEXT,
  language TEXT DEFAULT 'ja',
  jurisdiction TEXT DEFAULT 'JP',
  source TEXT DEFAULT 'laws.e-gov.go.jp'
);

-- Legal provisions (articles)
CREATE TABLE IF NOT EXISTS legal_provisions (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  document_id TEXT NOT NULL REFERENCES legal_documents(id),
  provision_ref TEXT NOT NULL,
  part TEXT,
  chapter TEXT,
  section TEXT NOT NULL,
  title TEXT,
  content TEXT NOT NULL,
  content_en TEXT,
  language TEXT DEFAULT 'ja',
  order_index INTEGER DEFAULT 0
);

-- EU documents (for APPI-GDPR adequacy references)
CREATE TABLE IF NOT EXISTS eu_documents (
  id TEXT PRIMARY KEY,
  type TEXT NOT NULL,
  year INTEGER NOT NULL,
  number INTEGER NOT NULL,
  community TEXT DEFAULT 'EU',
  celex_number TEXT,
  title TEXT,
  short_name TEXT,
  url_eur_lex TEXT
);

-- EU references (cross-references from Japanese law to EU law)
CREATE TABLE IF NOT EXISTS eu_references (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  document_id TEXT NOT NULL REFERENCES legal_documents(id),
  eu_document_id TEXT NOT NULL REFERENCES eu_documents(id),
  provision_id INTEGER REFERENCES legal_provisions(id),
  reference_type TEXT NOT NULL DEFAULT 'references',
  eu_article TEXT,
  full_citation TEXT,
  reference_context TEXT,
  is_primary_implementation INTEGER DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_provisions_document ON legal_provisions(document_id);
CREATE INDEX IF NOT EXISTS idx_provisions_ref ON legal_provisions(provision_ref);
CREATE INDEX IF NOT EXISTS idx_provisions_section ON legal_provisions(section);
CREATE INDEX IF NOT EXISTS idx_eu_references_document ON eu_references(document_id);
CREATE INDEX IF NOT EXISTS idx_eu_references_eu_doc ON eu_references(eu_document_id);
CREATE INDEX IF NOT EXISTS idx_eu_references_provision ON eu_references(provision_id);
CREATE INDEX IF NOT EXISTS idx_documents_title ON legal_documents(title);
CREATE INDEX IF NOT EXISTS idx_documents_title_en ON legal_documents(title_en);
CREATE INDEX IF NOT EXISTS idx_documents_short_name ON legal_documents(short_name);
CREATE INDEX IF NOT EXISTS idx_documents_law_number ON legal_documents(law_number);
"""

# 文書ストアの参照対象テーブル（件数集計で使用）
COUNTED_TABLES = (
    "legal_documents",
    "legal_provisions",
    "eu_documents",
    "eu_references",
)
