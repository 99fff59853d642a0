"""
jplaw: 法令ID ユーティリティ

法令は法令番号由来のID（例: act-57-2003 = 平成十五年法律第五十七号）、
e-Gov 法令ID（例: 415AC0000000057）、日本語題名、英語題名のいずれでも参照される。
"""

import re
from typing import List, Optional

from .numerals import kanji_to_int

# 元年 = 各元号の最初の年
ERA_BASE_YEAR = {
    '明治': 1867,
    '大正': 1911,
    '昭和': 1925,
    '平成': 1988,
    '令和': 2018,
}

STATUTE_ID_PATTERN = re.compile(r'^act-(\d+)-(\d{4})$', re.IGNORECASE)

_LAW_NUMBER_PATTERN = re.compile(
    r'(明治|大正|昭和|平成|令和)(元|[〇零一二三四五六七八九十百0-9]+)年'
    r'.*?法律第([〇零一二三四五六七八九十百千0-9]+)号'
)


def is_valid_statute_id(statute_id: str) -> bool:
    """空白のみでない文字列なら有効"""
    return bool(statute_id) and bool(statute_id.strip())


def statute_id_candidates(statute_id: str) -> List[str]:
    """
    照合に使う候補IDを列挙

    Examples:
        >>> statute_id_candidates('Act 57 2003')
        ['act 57 2003', 'Act 57 2003', 'act-57-2003']
    """
    trimmed = statute_id.strip()
    lowered = trimmed.lower()

    candidates: List[str] = []
    for candidate in (lowered, trimmed):
        if candidate not in candidates:
            candidates.append(candidate)

    if ' ' in lowered:
        dashed = re.sub(r'\s+', '-', lowered)
        if dashed not in candidates:
            candidates.append(dashed)
    if '-' in lowered:
        spaced = lowered.replace('-', ' ')
        if spaced not in candidates:
            candidates.append(spaced)

    return candidates


def law_number_to_statute_id(law_number: str) -> Optional[str]:
    """
    法令番号を act-<号>-<西暦> 形式のIDに変換

    Args:
        law_number: '平成十五年法律第五十七号' 形式

    Returns:
        'act-57-2003' 形式。法律以外（政令・省令など）や解釈不能な場合は None

    Examples:
        >>> law_number_to_statute_id('平成十五年法律第五十七号')
        'act-57-2003'
        >>> law_number_to_statute_id('令和元年法律第十六号')
        'act-16-2019'
    """
    match = _LAW_NUMBER_PATTERN.search(law_number)
    if not match:
        return None

    era, year_text, number_text = match.groups()
    era_year = 1 if year_text == '元' else kanji_to_int(year_text)
    number = kanji_to_int(number_text)
    if era_year <= 0 or number <= 0:
        return None

    return f"act-{number}-{ERA_BASE_YEAR[era] + era_year}"


def split_statute_id(statute_id: str) -> Optional[tuple]:
    """'act-57-2003' → (57, 2003)"""
    match = STATUTE_ID_PATTERN.match(statute_id.strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))
