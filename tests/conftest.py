"""
jplaw: テスト共通フィクスチャ

YAML シード → DatabaseBuilder → LawStore の最小構成を用意する。
"""

import sys
from pathlib import Path

# プロジェクトルートをパスに追加
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import pytest
import yaml

from jplaw.core.builder import DatabaseBuilder
from jplaw.core.store import LawStore


APPI_SEED = {
    'id': 'act-57-2003',
    'type': 'statute',
    'title': '個人情報の保護に関する法律',
    'title_en': 'Act on the Protection of Personal Information',
    'short_name': 'APPI',
    'law_number': '平成十五年法律第五十七号',
    'status': 'in_force',
    'url': 'https://laws.e-gov.go.jp/law/415AC0000000057',
    'provisions': [
        {'provision_ref': 'art-1', 'section': '1', 'chapter': '第一章 総則',
         'title': '（目的）', 'content': 'この法律は、個人情報の有用性に配慮しつつ、個人の権利利益を保護することを目的とする。'},
        {'provision_ref': 'art-3_2', 'section': '3_2', 'chapter': '第一章 総則',
         'title': None, 'content': '第三条の二の本文'},
        {'section': 17, 'chapter': '第四章 個人情報取扱事業者等の義務等',
         'title': '（利用目的の特定）', 'content': '個人情報取扱事業者は、個人情報を取り扱うに当たっては、その利用の目的をできる限り特定しなければならない。'},
        {'provision_ref': 'art-24', 'section': '24', 'chapter': '第四章 個人情報取扱事業者等の義務等',
         'title': '（外国にある第三者への提供の制限）', 'content': '第二十四条の本文'},
    ],
}

REPEALED_SEED = {
    'id': 'act-10-1950',
    'title': '旧テスト法',
    'status': 'repealed',
    'provisions': [
        {'section': '1', 'content': '旧法の第一条'},
    ],
}


def write_seed(seed_dir: Path, name: str, data: dict) -> Path:
    path = seed_dir / name
    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(data, f, allow_unicode=True, sort_keys=False)
    return path


@pytest.fixture
def seed_dir(tmp_path):
    seed_dir = tmp_path / 'seed'
    seed_dir.mkdir()
    write_seed(seed_dir, 'appi.yaml', APPI_SEED)
    write_seed(seed_dir, 'repealed.yml', REPEALED_SEED)
    return seed_dir


@pytest.fixture
def db_path(tmp_path, seed_dir):
    db_path = tmp_path / 'db' / 'database.db'
    DatabaseBuilder(seed_dir, db_path).build()
    return db_path


@pytest.fixture
def store(db_path):
    store = LawStore(db_path)
    yield store
    store.close()
