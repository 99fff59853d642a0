"""
jplaw ユーティリティモジュール
"""

from .numerals import (
    kanji_to_int,
    int_to_kanji,
    parse_article_number,
    parse_paragraph_number,
    parse_item_number,
    format_article_kanji,
    format_paragraph_kanji,
    format_item_kanji,
)
from .statute_id import (
    is_valid_statute_id,
    statute_id_candidates,
    law_number_to_statute_id,
    split_statute_id,
)

__all__ = [
    # numerals
    'kanji_to_int',
    'int_to_kanji',
    'parse_article_number',
    'parse_paragraph_number',
    'parse_item_number',
    'format_article_kanji',
    'format_paragraph_kanji',
    'format_item_kanji',
    # statute_id
    'is_valid_statute_id',
    'statute_id_candidates',
    'law_number_to_statute_id',
    'split_statute_id',
]
