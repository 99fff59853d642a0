#!/usr/bin/env python3
"""
jplaw: 引用バリデータのテスト

テスト対象:
- validate_citation() の警告の内容と順序
- 文書ストアの障害が伝播すること
- LawStore と組み合わせた確認
"""

import sqlite3

import pytest

from jplaw.citation.types import DocumentRecord
from jplaw.citation.validator import validate_citation


class FakeLookup:
    """メモリ上の文書ストア"""

    def __init__(self, documents, provisions):
        self.documents = documents
        self.provisions = provisions
        self.searched = []

    def find_document(self, term):
        self.searched.append(term)
        for doc in self.documents:
            names = (doc.title, doc.title_en or '', doc.short_name or '')
            if doc.id == term or any(term and term in name for name in names):
                return doc
        return None

    def provision_exists(self, document_id, article):
        return article in self.provisions.get(document_id, set())


class BrokenLookup:
    def find_document(self, term):
        raise sqlite3.OperationalError('unable to open database file')

    def provision_exists(self, document_id, article):
        return False


@pytest.fixture
def lookup():
    return FakeLookup(
        documents=[
            DocumentRecord(id='act-57-2003', title='個人情報の保護に関する法律',
                           title_en='Act on the Protection of Personal Information', short_name='APPI'),
            DocumentRecord(id='act-10-1950', title='旧テスト法', status='repealed'),
        ],
        provisions={'act-57-2003': {'1', '17'}, 'act-10-1950': {'1'}},
    )


class TestValidateCitation:

    def test_existing_provision(self, lookup):
        result = validate_citation(lookup, '第十七条 個人情報の保護に関する法律')
        assert result.document_exists
        assert result.provision_exists
        assert result.document_title == '個人情報の保護に関する法律'
        assert result.status == 'in_force'
        assert result.warnings == ()

    def test_english_title_used_when_no_native_title(self, lookup):
        result = validate_citation(lookup, 'Art. 17, APPI')
        assert lookup.searched == ['APPI']
        assert result.provision_exists

    def test_repealed_and_missing_article(self, lookup):
        """廃止の警告が条文なしの警告より先"""
        result = validate_citation(lookup, '第十七条 旧テスト法')
        assert result.document_exists
        assert not result.provision_exists
        assert result.warnings == (
            'This statute has been repealed',
            'Article 17 not found in 旧テスト法',
        )

    def test_document_not_found(self, lookup):
        result = validate_citation(lookup, '第一条 存在しない法律')
        assert not result.document_exists
        assert not result.provision_exists
        assert result.warnings == ('Document "存在しない法律" not found in database',)

    def test_unparseable_citation(self, lookup):
        result = validate_citation(lookup, 'random text')
        assert not result.citation.valid
        assert not result.document_exists
        assert result.warnings == ('Could not parse Japanese legal citation: "random text"',)
        assert lookup.searched == []

    def test_lookup_failure_propagates(self):
        with pytest.raises(sqlite3.OperationalError):
            validate_citation(BrokenLookup(), '第十七条 個人情報の保護に関する法律')

    def test_to_dict(self, lookup):
        data = validate_citation(lookup, '第十七条 旧テスト法').to_dict()
        assert data['citation']['article'] == '17'
        assert data['status'] == 'repealed'
        assert data['warnings'] == ['This statute has been repealed', 'Article 17 not found in 旧テスト法']


class TestValidateAgainstStore:
    """LawStore を文書ストアとして使う"""

    @pytest.mark.parametrize("citation", [
        '第十七条 個人情報の保護に関する法律',
        'Article 17, Act on the Protection of Personal Information (Act No. 57 of 2003)',
        'Art. 17, APPI',
        'act-57-2003, art. 17',
    ])
    def test_all_formats_resolve(self, store, citation):
        result = validate_citation(store, citation)
        assert result.document_exists
        assert result.provision_exists
        assert result.warnings == ()

    def test_repealed_statute(self, store):
        result = validate_citation(store, '第十七条 旧テスト法')
        assert result.status == 'repealed'
        assert result.warnings == (
            'This statute has been repealed',
            'Article 17 not found in 旧テスト法',
        )

    def test_branch_article_matches_by_prefix(self, store):
        """art-3_2 は第三条の照会に一致する"""
        assert validate_citation(store, '第三条 個人情報の保護に関する法律').provision_exists
