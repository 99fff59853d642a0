"""
e-Gov 法令 XML パーサ

法令 XML の階層:
  編 (Part) > 章 (Chapter) > 節 (Section) > 款 (Subsection) > 目 (Division)
  > 条 (Article) > 項 (Paragraph) > 号 (Item)

条ごとに階層コンテキスト（編・章・節）を付けて抽出する。
v1 lawdata 応答（DataRoot 付き）と v2 から変換した XML（Law が根）の両方を扱う。
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from bs4 import BeautifulSoup, Tag

from ..utils.numerals import parse_article_number

logger = logging.getLogger(__name__)

# 構造要素 → (タイトル要素, コンテキストキー)
STRUCTURE_TAGS: Dict[str, tuple] = {
    "Part": ("PartTitle", "part"),
    "Chapter": ("ChapterTitle", "chapter"),
    "Section": ("SectionTitle", "section"),
    "Subsection": ("SubsectionTitle", "subsection"),
    "Division": ("DivisionTitle", "division"),
}


@dataclass
class ParsedItem:
    number: str
    content: str


@dataclass
class ParsedParagraph:
    number: str
    content: str
    items: List[ParsedItem] = field(default_factory=list)


@dataclass
class ParsedArticle:
    number: str                 # 算用数字（枝番は 3_2 の形）
    caption: str                # （目的） など
    content: str
    part: Optional[str] = None
    chapter: Optional[str] = None
    section: Optional[str] = None
    paragraphs: List[ParsedParagraph] = field(default_factory=list)


@dataclass
class ParsedLaw:
    law_id: str
    law_num: str
    law_name: str
    articles: List[ParsedArticle] = field(default_factory=list)
    supplementary_provisions: List[ParsedArticle] = field(default_factory=list)


def _child(node: Tag, name: str) -> Optional[Tag]:
    """直下の子要素を1件取得"""
    return node.find(name, recursive=False)


def _text(node: Optional[Tag]) -> str:
    if node is None:
        return ""
    return node.get_text().strip()


def _sentences(node: Optional[Tag]) -> str:
    """Sentence 要素を連結（Column 区切りは全角スペース）"""
    if node is None:
        return ""
    columns = node.find_all("Column")
    if columns:
        return "　".join(_sentences(c) for c in columns)
    sentences = node.find_all("Sentence")
    if sentences:
        return "".join(s.get_text() for s in sentences).strip()
    return _text(node)


def _article_number(article: Tag) -> str:
    num = article.get("Num")
    if num:
        return str(num)
    title = _text(_child(article, "ArticleTitle"))
    return parse_article_number(title) if title else "0"


def _parse_items(paragraph: Tag) -> List[ParsedItem]:
    items = []
    for item in paragraph.find_all("Item", recursive=False):
        label = _text(_child(item, "ItemTitle"))
        number = str(item.get("Num") or label or "0")
        items.append(ParsedItem(number=number, content=_sentences(_child(item, "ItemSentence"))))
    return items


def _parse_paragraphs(article: Tag) -> List[ParsedParagraph]:
    paragraphs = []
    for para in article.find_all("Paragraph", recursive=False):
        paragraphs.append(ParsedParagraph(
            number=str(para.get("Num") or "1"),
            content=_sentences(_child(para, "ParagraphSentence")),
            items=_parse_items(para),
        ))
    return paragraphs


def _article_content(paragraphs: List[ParsedParagraph]) -> str:
    lines = []
    for para in paragraphs:
        lines.append(para.content)
        for item in para.items:
            lines.append(f"  {item.number} {item.content}")
    return "\n".join(lines)


def _parse_article(article: Tag, context: Dict[str, Optional[str]]) -> ParsedArticle:
    paragraphs = _parse_paragraphs(article)
    content = _article_content(paragraphs) or _text(article)
    return ParsedArticle(
        number=_article_number(article),
        caption=_text(_child(article, "ArticleCaption")),
        content=content,
        part=context.get("part"),
        chapter=context.get("chapter"),
        section=context.get("section"),
        paragraphs=paragraphs,
    )


def walk_structure(node: Tag, context: Optional[Dict[str, Optional[str]]] = None) -> List[ParsedArticle]:
    """
    構造要素を再帰的にたどって条を抽出

    Args:
        node: MainProvision / SupplProvision / Chapter などの要素
        context: 上位の編・章・節タイトル

    Returns:
        文書順の ParsedArticle リスト
    """
    context = context or {}
    results: List[ParsedArticle] = []

    for child in node.find_all(recursive=False):
        if child.name == "Article":
            results.append(_parse_article(child, context))
        elif child.name in STRUCTURE_TAGS:
            title_tag, key = STRUCTURE_TAGS[child.name]
            child_context = dict(context)
            child_context[key] = _text(_child(child, title_tag)) or None
            results.extend(walk_structure(child, child_context))

    return results


def _check_result(soup: BeautifulSoup, law_id: str) -> None:
    """v1 応答の Result/Code を確認"""
    result = soup.find("Result")
    if result is None:
        return
    code = _text(result.find("Code"))
    if code and code != "0":
        message = _text(result.find("Message")) or "Unknown error"
        raise ValueError(f"e-Gov API error for {law_id}: {message}")


def parse_law_xml(law_id: str, xml: str) -> ParsedLaw:
    """
    法令 XML をパース

    Raises:
        ValueError: e-Gov API がエラーを返した場合、または Law 要素がない場合
    """
    soup = BeautifulSoup(xml, "xml")
    _check_result(soup, law_id)

    law = soup.find("Law")
    if law is None:
        raise ValueError(f"No Law element in XML for {law_id}")

    law_body = _child(law, "LawBody")
    law_num = _text(_child(law, "LawNum")) or _text(soup.find("LawNum"))
    law_name = _text(law_body.find("LawTitle")) if law_body else ""

    parsed = ParsedLaw(law_id=law_id, law_num=law_num, law_name=law_name)
    if law_body is None:
        logger.warning(f"No LawBody found for {law_id}")
        return parsed

    main = _child(law_body, "MainProvision")
    if main is not None:
        parsed.articles = walk_structure(main)

    for suppl in law_body.find_all("SupplProvision", recursive=False):
        parsed.supplementary_provisions.extend(walk_structure(suppl))

    logger.info(
        f"Parsed {law_id}: {len(parsed.articles)} articles, "
        f"{len(parsed.supplementary_provisions)} supplementary"
    )
    return parsed
