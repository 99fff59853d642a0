"""
Citation Formatter

形式:
  full:      "Article 17, Act on Protection of Personal Information (Act No. 57 of 2003)"
  short:     "Art. 17, APPI"
  pinpoint:  "Art. 17(1)"
  japanese:  "第十七条 個人情報の保護に関する法律"
"""
from typing import Union

from .types import CitationFormat, ParsedCitation
from ..utils.numerals import (
    format_article_kanji,
    format_paragraph_kanji,
    format_item_kanji,
)


def _coerce_format(style: Union[CitationFormat, str, None]) -> CitationFormat:
    """未知の形式は FULL として扱う"""
    if isinstance(style, CitationFormat):
        return style
    try:
        return CitationFormat(style)
    except (ValueError, TypeError):
        return CitationFormat.FULL


def build_pinpoint(parsed: ParsedCitation) -> str:
    """17(1)(2) 形式の参照を組み立てる"""
    ref = parsed.article or ''
    if parsed.paragraph:
        ref += f"({parsed.paragraph})"
    if parsed.item:
        ref += f"({parsed.item})"
    return ref


def build_japanese_reference(parsed: ParsedCitation) -> str:
    """第十七条第一項第二号 形式の参照を組み立てる"""
    ref = format_article_kanji(parsed.article or '')
    if parsed.paragraph:
        ref += format_paragraph_kanji(parsed.paragraph)
    if parsed.item:
        ref += format_item_kanji(parsed.item)
    return ref


def format_citation(
    parsed: ParsedCitation,
    style: Union[CitationFormat, str] = CitationFormat.FULL,
) -> str:
    """
    ParsedCitation を指定形式の文字列に整形

    Args:
        parsed: 解析済みの引用
        style: 出力形式（full / short / pinpoint / japanese）。未知の値は full

    Returns:
        整形済み文字列。無効な引用や条番号のない引用は空文字列
    """
    if not parsed.valid or not parsed.article:
        return ''

    fmt = _coerce_format(style)
    name_en_first = parsed.title_en or parsed.title or ''

    if fmt == CitationFormat.SHORT:
        return f"Art. {build_pinpoint(parsed)}, {name_en_first}".strip()

    if fmt == CitationFormat.PINPOINT:
        return f"Art. {build_pinpoint(parsed)}"

    if fmt == CitationFormat.JAPANESE:
        name = parsed.title or parsed.title_en or ''
        return f"{build_japanese_reference(parsed)} {name}".strip()

    act_info = ''
    if parsed.act_number and parsed.year:
        act_info = f" (Act No. {parsed.act_number} of {parsed.year})"
    return f"Article {build_pinpoint(parsed)}, {name_en_first}{act_info}".strip()
