"""
Citation Parser

日本法令の引用文字列を解析し、ParsedCitation に正規化する。

対応形式（試行順）:
  1. 日本語（条が先頭）: "第十七条 個人情報の保護に関する法律"
                        "第十七条第一項第二号 個人情報の保護に関する法律"
  2. 日本語（条が末尾）: "個人情報の保護に関する法律 第十七条"
  3. 英語（完全）:      "Article 17, Act on Protection of Personal Information (Act No. 57 of 2003)"
  4. 英語（略式）:      "Art. 17, APPI"
  5. ID形式:           "act-57-2003, art. 17"

最初に一致した形式を採用する。日本語形式は条の標識で確定できるため先に試す。
"""
import re
import logging
from typing import Callable, Optional, Sequence, Tuple

from .types import CitationKind, ParsedCitation
from ..utils.numerals import (
    parse_article_number,
    parse_paragraph_number,
    parse_item_number,
)
from ..utils.statute_id import split_statute_id

logger = logging.getLogger(__name__)

Extractor = Callable[[re.Match], ParsedCitation]

# 法令名の末尾から種別を推定する
_CABINET_ORDER_SUFFIXES = ('施行令', '政令')
_MINISTERIAL_ORDINANCE_SUFFIXES = ('施行規則', '省令')
_CABINET_ORDER_EN = re.compile(r'\bcabinet\s+order\b|\border\s+for\s+enforcement\b', re.IGNORECASE)
_MINISTERIAL_ORDINANCE_EN = re.compile(r'\bordinance\b', re.IGNORECASE)


def infer_kind(title: Optional[str], title_en: Optional[str] = None) -> CitationKind:
    """法令名から種別を推定（判定できなければ法律）"""
    if title:
        if title.endswith(_CABINET_ORDER_SUFFIXES):
            return CitationKind.CABINET_ORDER
        if title.endswith(_MINISTERIAL_ORDINANCE_SUFFIXES):
            return CitationKind.MINISTERIAL_ORDINANCE
    if title_en:
        if _CABINET_ORDER_EN.search(title_en):
            return CitationKind.CABINET_ORDER
        if _MINISTERIAL_ORDINANCE_EN.search(title_en):
            return CitationKind.MINISTERIAL_ORDINANCE
    return CitationKind.STATUTE


class CitationParser:
    """
    順序付きの (パターン, 抽出関数) 列で引用を解析する

    パターンは生成時に一度だけコンパイルし、以後変更しない。
    """

    def __init__(self):
        # 第…条[第…項][第…号]。番号部分は空白と 条・項・号 を含まない
        ref = r'第[^条項号\s]+条(?:第[^条項号\s]+項)?(?:第[^条項号\s]+号)?'

        # 日本語: 第十七条 個人情報の保護に関する法律 / 第十七条第一項 ...
        leading_native = re.compile(rf'^({ref})\s*[,、]?\s*(.+)$')
        # 末尾に条: 個人情報の保護に関する法律 第十七条（末尾から探し、法令名は一致位置の手前）
        trailing_native = re.compile(rf'(?<=\S)\s+({ref})$')
        english_full = re.compile(
            r'^(?:Article|Art\.?)\s+([0-9]+)'
            r'(?:\s*,?\s*(?:Paragraph|Para\.?|Par\.?)\s+([0-9]+))?'
            r'(?:\s*,?\s*(?:Item)\s+([0-9]+))?'
            r'\s*[,、]\s*(.+?)'
            r'(?:\s?\(Act\s+No\.\s*([0-9]+)\s+of\s+([0-9]{4})\))?$',
            re.IGNORECASE,
        )
        english_short = re.compile(
            r'^(?:Art\.?|Article)\s+([0-9]+)'
            r'(?:\s*,?\s*(?:Para\.?|Paragraph)\s+([0-9]+))?'
            r'\s*[,、]\s*(.+?)$',
            re.IGNORECASE,
        )
        id_based = re.compile(
            r'^(act-[0-9]+-[0-9]{4})\s*[,、]\s*(?:art\.?|article)\s*\.?\s*([0-9]+)'
            r'(?:\s*[,、]\s*(?:para\.?|paragraph)\s*\.?\s*([0-9]+))?$',
            re.IGNORECASE,
        )

        self._paragraph_in_ref = re.compile(r'条(第[^条項号]+?項)')
        self._item_in_ref = re.compile(r'[条項](第[^条項号]+?号)')

        self.grammars: Sequence[Tuple[re.Pattern, Extractor]] = (
            (leading_native, self._from_leading_native),
            (trailing_native, self._from_trailing_native),
            (english_full, self._from_english_full),
            # english_full が先に受理するため通常は到達しないが、試行順を保つために残す
            (english_short, self._from_english_short),
            (id_based, self._from_id_based),
        )

    def parse(self, citation: str) -> ParsedCitation:
        trimmed = (citation or '').strip()

        for pattern, extract in self.grammars:
            match = pattern.search(trimmed)
            if match:
                return extract(match)

        logger.debug(f"No citation grammar matched: {trimmed!r}")
        return ParsedCitation.invalid(f'Could not parse Japanese legal citation: "{trimmed}"')

    # ------------------------------------------------------------------
    # 抽出関数
    # ------------------------------------------------------------------

    def _from_leading_native(self, match: re.Match) -> ParsedCitation:
        return self._native(match.group(1), match.group(2))

    def _from_trailing_native(self, match: re.Match) -> ParsedCitation:
        return self._native(match.group(1), match.string[:match.start()])

    def _native(self, article_ref: str, law_name: str) -> ParsedCitation:
        """第N条[第N項][第N号] ブロックを分解"""
        title = law_name.strip()
        article = parse_article_number(article_ref)

        paragraph = None
        para_match = self._paragraph_in_ref.search(article_ref)
        if para_match:
            paragraph = parse_paragraph_number(para_match.group(1))

        # 項なしの号（第十七条第二号）も受け付ける
        item = None
        item_match = self._item_in_ref.search(article_ref)
        if item_match:
            item = parse_item_number(item_match.group(1))

        return ParsedCitation(
            valid=True,
            kind=infer_kind(title),
            title=title,
            article=article,
            paragraph=paragraph,
            item=item,
        )

    def _from_english_full(self, match: re.Match) -> ParsedCitation:
        article, paragraph, item, title_en, act_number, year = match.groups()
        title_en = title_en.strip()
        return ParsedCitation(
            valid=True,
            kind=infer_kind(None, title_en),
            title_en=title_en,
            article=parse_article_number(article),
            paragraph=parse_paragraph_number(paragraph) if paragraph else None,
            item=parse_item_number(item) if item else None,
            act_number=int(act_number) if act_number else None,
            year=int(year) if year else None,
        )

    def _from_english_short(self, match: re.Match) -> ParsedCitation:
        article, paragraph, title_en = match.groups()
        title_en = title_en.strip()
        return ParsedCitation(
            valid=True,
            kind=infer_kind(None, title_en),
            title_en=title_en,
            article=parse_article_number(article),
            paragraph=parse_paragraph_number(paragraph) if paragraph else None,
        )

    def _from_id_based(self, match: re.Match) -> ParsedCitation:
        statute_id, article, paragraph = match.groups()
        act_number, year = split_statute_id(statute_id)
        return ParsedCitation(
            valid=True,
            kind=CitationKind.STATUTE,
            title=statute_id,
            article=parse_article_number(article),
            paragraph=parse_paragraph_number(paragraph) if paragraph else None,
            act_number=act_number,
            year=year,
        )


_default_parser = CitationParser()


def parse_citation(citation: str) -> ParsedCitation:
    """
    引用文字列を解析

    Args:
        citation: 任意形式の引用文字列

    Returns:
        ParsedCitation。どの形式にも一致しない場合は valid=False

    Examples:
        >>> parse_citation('第十七条 個人情報の保護に関する法律').article
        '17'
        >>> parse_citation('Art. 17, APPI').title_en
        'APPI'
    """
    return _default_parser.parse(citation)
