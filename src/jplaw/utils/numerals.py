"""
jplaw: 漢数字変換ユーティリティ

条・項・号の番号表記の変換を一元管理するモジュール。
- 漢数字 ⇔ 算用数字
- 第N条 / 第N項 / 第N号 ⇔ 算用数字文字列

すべての関数は例外を送出しない。解釈できない入力は 0、空文字列、
または入力そのものを返す。
"""

import re
from typing import Dict, Union

# ==============================================================================
# 漢数字テーブル
# ==============================================================================

KANJI_TO_DIGIT: Dict[str, int] = {
    '〇': 0, '零': 0,
    '一': 1, '壱': 1,
    '二': 2, '弐': 2,
    '三': 3, '参': 3,
    '四': 4,
    '五': 5,
    '六': 6,
    '七': 7,
    '八': 8,
    '九': 9,
}

UNIT_MAP: Dict[str, int] = {
    '十': 10,
    '百': 100,
    '千': 1000,
}

# 万は千以下の位をまとめて持ち上げる
MAN = '万'

DIGIT_TO_KANJI: Dict[int, str] = {
    0: '〇',
    1: '一',
    2: '二',
    3: '三',
    4: '四',
    5: '五',
    6: '六',
    7: '七',
    8: '八',
    9: '九',
}

ARTICLE_MARKER = '条'
PARAGRAPH_MARKER = '項'
ITEM_MARKER = '号'

_ARABIC_PATTERN = re.compile(r'^[0-9]+$')
_WRAPPER_PATTERNS = {
    marker: re.compile(rf'^第(.+?){marker}')
    for marker in (ARTICLE_MARKER, PARAGRAPH_MARKER, ITEM_MARKER)
}


# ==============================================================================
# 漢数字 ⇔ 整数
# ==============================================================================

def kanji_to_int(text: str) -> int:
    """
    漢数字を整数に変換

    対応形式:
    - 位取り形式: 十七 → 17, 百二十三 → 123, 千二百三十四 → 1234
    - 連結形式: 一〇三 → 103（年号などで使われる）

    Args:
        text: 漢数字文字列

    Returns:
        整数値。空文字列は 0

    Examples:
        >>> kanji_to_int('十七')
        17
        >>> kanji_to_int('百二十三')
        123
        >>> kanji_to_int('一〇三')
        103
    """
    if not text:
        return 0
    if text.isdecimal():
        return int(text)

    all_digits = all(c in KANJI_TO_DIGIT for c in text)
    if all_digits and len(text) > 1:
        return _parse_concatenative_kanji(text)

    if len(text) == 1 and text in KANJI_TO_DIGIT:
        return KANJI_TO_DIGIT[text]

    return _parse_positional_kanji(text)


def _parse_positional_kanji(text: str) -> int:
    """位取り形式の漢数字をパース（二十三 → 23）"""
    total = 0
    section = 0
    current = 0

    for char in text:
        if char in KANJI_TO_DIGIT:
            current = KANJI_TO_DIGIT[char]
        elif char in UNIT_MAP:
            # 十, 百 単独は係数 1
            section += (current or 1) * UNIT_MAP[char]
            current = 0
        elif char == MAN:
            total += ((section + current) or 1) * 10000
            section = 0
            current = 0

    return total + section + current


def _parse_concatenative_kanji(text: str) -> int:
    """連結形式の漢数字をパース（一〇三 → 103）"""
    return int(''.join(str(KANJI_TO_DIGIT[c]) for c in text))


def int_to_kanji(num: int) -> str:
    """
    整数を漢数字に変換

    Args:
        num: 整数

    Returns:
        漢数字文字列。負数は空文字列

    Examples:
        >>> int_to_kanji(17)
        '十七'
        >>> int_to_kanji(10)
        '十'
        >>> int_to_kanji(1234)
        '千二百三十四'
    """
    if num < 0:
        return ''
    if num <= 9:
        return DIGIT_TO_KANJI[num]

    if num >= 10000:
        upper, lower = divmod(num, 10000)
        return int_to_kanji(upper) + MAN + (int_to_kanji(lower) if lower else '')

    result = ''
    remaining = num
    for unit_char, unit in (('千', 1000), ('百', 100), ('十', 10)):
        coefficient, remaining = divmod(remaining, unit)
        if coefficient == 0:
            continue
        if coefficient > 1:
            result += DIGIT_TO_KANJI[coefficient]
        result += unit_char

    if remaining > 0:
        result += DIGIT_TO_KANJI[remaining]
    return result


# ==============================================================================
# 条・項・号の番号
# ==============================================================================

def _parse_wrapped_number(ref: str, marker: str) -> str:
    trimmed = ref.strip()

    match = _WRAPPER_PATTERNS[marker].match(trimmed)
    if match:
        inner = match.group(1)
        if _ARABIC_PATTERN.match(inner):
            return inner
        value = kanji_to_int(inner)
        return str(value) if value > 0 else inner

    if _ARABIC_PATTERN.match(trimmed):
        return trimmed

    value = kanji_to_int(trimmed)
    return str(value) if value > 0 else trimmed


def parse_article_number(ref: str) -> str:
    """
    条番号を算用数字文字列に変換

    Args:
        ref: '第十七条', '第1条', '十七', '17' など

    Returns:
        算用数字文字列。変換できない場合は第…条の内側（または入力）をそのまま返す

    Examples:
        >>> parse_article_number('第十七条')
        '17'
        >>> parse_article_number('17')
        '17'
        >>> parse_article_number('第十七条第一項')
        '17'
    """
    return _parse_wrapped_number(ref, ARTICLE_MARKER)


def parse_paragraph_number(ref: str) -> str:
    """項番号を算用数字文字列に変換（'第一項' → '1'）"""
    return _parse_wrapped_number(ref, PARAGRAPH_MARKER)


def parse_item_number(ref: str) -> str:
    """号番号を算用数字文字列に変換（'第二号' → '2'）"""
    return _parse_wrapped_number(ref, ITEM_MARKER)


def _format_wrapped_number(num: Union[int, str], marker: str) -> str:
    value = None
    if isinstance(num, int):
        value = num
    elif isinstance(num, str) and _ARABIC_PATTERN.match(num.strip()):
        value = int(num.strip())

    if value is None or value <= 0:
        return f"第{num}{marker}"
    return f"第{int_to_kanji(value)}{marker}"


def format_article_kanji(num: Union[int, str]) -> str:
    """
    条番号を 第N条 形式（漢数字）に整形

    Args:
        num: 整数または算用数字文字列

    Returns:
        '第十七条' 形式。正の整数として解釈できない場合は入力をそのまま包む

    Examples:
        >>> format_article_kanji('17')
        '第十七条'
        >>> format_article_kanji(1)
        '第一条'
        >>> format_article_kanji('3の2')
        '第3の2条'
    """
    return _format_wrapped_number(num, ARTICLE_MARKER)


def format_paragraph_kanji(num: Union[int, str]) -> str:
    """項番号を 第N項 形式に整形"""
    return _format_wrapped_number(num, PARAGRAPH_MARKER)


def format_item_kanji(num: Union[int, str]) -> str:
    """号番号を 第N号 形式に整形"""
    return _format_wrapped_number(num, ITEM_MARKER)
