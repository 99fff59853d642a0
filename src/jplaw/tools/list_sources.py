"""
list_sources: データソース・収録範囲・鮮度の情報
"""
from typing import Any, Dict

from .metadata import tool_response

SOURCES = [
    {
        "name": "e-Gov Law Portal (e-Gov法令検索)",
        "authority": "Digital Agency (デジタル庁), Government of Japan",
        "url": "https://laws.e-gov.go.jp",
        "license": "Government Open Data (Japan Open Data)",
        "coverage": "Japanese statutes (法律), cabinet orders (政令), and ministerial ordinances (省令).",
        "languages": ["ja"],
    },
    {
        "name": "Japanese Law Translation (JLT)",
        "authority": "Ministry of Justice (法務省), Government of Japan",
        "url": "https://www.japaneselawtranslation.go.jp",
        "license": "Government Open Data (Reference Translations)",
        "coverage": "English translations of major Japanese laws. Translations are reference only.",
        "languages": ["en", "ja"],
    },
    {
        "name": "EUR-Lex (for EU adequacy cross-references)",
        "authority": "Publications Office of the European Union",
        "url": "https://eur-lex.europa.eu",
        "license": "Commission Decision 2011/833/EU (reuse of EU documents)",
        "coverage": "EU regulation and directive references for APPI-GDPR adequacy cross-referencing.",
        "languages": ["en"],
    },
]


def list_sources_tool(store) -> Dict[str, Any]:
    document_count = store.count("legal_documents")
    provision_count = store.count("legal_provisions")

    return tool_response({
        "jurisdiction": "Japan (JP)",
        "sources": SOURCES,
        "database": {
            "tier": store.meta("tier"),
            "schema_version": store.meta("schema_version"),
            "built_at": store.meta("built_at"),
            "document_count": document_count,
            "provision_count": provision_count,
            "eu_document_count": store.count("eu_documents"),
        },
        "limitations": [
            f"Covers {document_count:,} Japanese statutes (法律).",
            "English translations may lag behind Japanese text amendments.",
            "The Japanese text is the sole legally authoritative version; English translations are reference only.",
            "EU cross-references focus on APPI-GDPR adequacy decision context.",
            "Court decisions (判例) and legal commentary are not included.",
        ],
    }, store)
