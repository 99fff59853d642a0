#!/usr/bin/env python3
"""
jplaw: 漢数字変換のテスト

テスト対象:
- kanji_to_int() の位取り形式・連結形式
- int_to_kanji() の係数省略と 万
- 第N条/項/号 の解析と整形
"""

import pytest

from jplaw.utils.numerals import (
    kanji_to_int,
    int_to_kanji,
    parse_article_number,
    parse_paragraph_number,
    parse_item_number,
    format_article_kanji,
    format_paragraph_kanji,
    format_item_kanji,
)


class TestKanjiToInt:
    """漢数字 → 整数"""

    @pytest.mark.parametrize("text,expected", [
        ('一', 1),
        ('九', 9),
        ('十', 10),
        ('十七', 17),
        ('二十', 20),
        ('百', 100),
        ('百二十三', 123),
        ('千二百三十四', 1234),
        ('二千三', 2003),
        ('九千九百九十九', 9999),
    ])
    def test_positional(self, text, expected):
        """位取り形式"""
        assert kanji_to_int(text) == expected

    def test_concatenative(self):
        """数字のみの連結形式は桁ごとに読む"""
        assert kanji_to_int('一〇三') == 103
        assert kanji_to_int('二〇〇三') == 2003

    def test_man(self):
        """万を含む数"""
        assert kanji_to_int('一万二千三百四十五') == 12345
        assert kanji_to_int('二千万') == 20000000

    def test_variant_digits(self):
        """大字・零"""
        assert kanji_to_int('壱') == 1
        assert kanji_to_int('参十') == 30
        assert kanji_to_int('零') == 0

    def test_empty_is_zero(self):
        assert kanji_to_int('') == 0

    def test_arabic_passthrough(self):
        """算用数字（全角含む）はそのまま整数化"""
        assert kanji_to_int('17') == 17
        assert kanji_to_int('１７') == 17

    def test_unknown_characters_ignored(self):
        """数字でない文字は無視される"""
        assert kanji_to_int('abc') == 0


class TestIntToKanji:
    """整数 → 漢数字"""

    @pytest.mark.parametrize("num,expected", [
        (0, '〇'),
        (1, '一'),
        (10, '十'),
        (17, '十七'),
        (110, '百十'),
        (1234, '千二百三十四'),
        (2003, '二千三'),
        (12345, '一万二千三百四十五'),
        (10000, '一万'),
    ])
    def test_values(self, num, expected):
        assert int_to_kanji(num) == expected

    def test_negative_is_empty(self):
        assert int_to_kanji(-1) == ''

    def test_round_trip_up_to_9999(self):
        """1〜9999 は往復で元に戻る"""
        for n in range(1, 10000):
            assert kanji_to_int(int_to_kanji(n)) == n

    @pytest.mark.parametrize("text", ['十七', '百二十三', '二千五', '九百九十九'])
    def test_canonical_forms_stable(self, text):
        """標準形の漢数字は往復で変化しない"""
        assert int_to_kanji(kanji_to_int(text)) == text


class TestParseNumbers:
    """第N条/項/号 → 算用数字文字列"""

    @pytest.mark.parametrize("ref,expected", [
        ('第十七条', '17'),
        ('第1条', '1'),
        ('第１７条', '17'),
        ('17', '17'),
        ('十七', '17'),
        ('  第二十三条  ', '23'),
        ('第十七条第一項', '17'),
        ('第三条の二', '3'),
    ])
    def test_article(self, ref, expected):
        assert parse_article_number(ref) == expected

    def test_article_unconvertible_returns_inner(self):
        """変換できない場合は第…条の内側を返す"""
        assert parse_article_number('第X条') == 'X'

    def test_article_unconvertible_returns_input(self):
        assert parse_article_number('abc') == 'abc'

    def test_paragraph(self):
        assert parse_paragraph_number('第一項') == '1'
        assert parse_paragraph_number('2') == '2'

    def test_item(self):
        assert parse_item_number('第二号') == '2'
        assert parse_item_number('第十一号') == '11'


class TestFormatNumbers:
    """算用数字 → 第N条/項/号"""

    def test_article(self):
        assert format_article_kanji('17') == '第十七条'
        assert format_article_kanji(1) == '第一条'
        assert format_article_kanji(' 24 ') == '第二十四条'

    def test_paragraph_and_item(self):
        assert format_paragraph_kanji('1') == '第一項'
        assert format_item_kanji(2) == '第二号'

    @pytest.mark.parametrize("raw", ['abc', '3の2', 0, '-3'])
    def test_non_positive_or_non_numeric_wrapped(self, raw):
        """正の整数でなければそのまま包む"""
        assert format_article_kanji(raw) == f'第{raw}条'

    def test_parse_format_round_trip(self):
        assert format_article_kanji(parse_article_number('第十七条')) == '第十七条'
