#!/usr/bin/env python3
"""
jplaw: e-Gov 法令 XML パースと取り込みのテスト

テスト対象:
- parse_law_xml() の階層コンテキスト・項・号・附則
- json_to_xml() による v2 応答の変換
- EGovClient の v2 → v1 フォールバック（通信はモック）
- Ingester によるシードファイル生成
"""

import json

import pytest
import requests
import yaml

from jplaw.client.egov import EGovClient, json_to_xml
from jplaw.config import EGOV_API_BASE_URL, EGOV_API_V2_BASE_URL
from jplaw.core.builder import load_seed_file
from jplaw.core.ingest import KEY_LAWS, Ingester, build_seed, load_targets
from jplaw.core.law_parser import parse_law_xml


LAW_XML = """<?xml version="1.0" encoding="UTF-8"?>
<DataRoot>
  <Result><Code>0</Code><Message/></Result>
  <ApplData>
    <LawId>415AC0000000057</LawId>
    <LawFullText>
      <Law Era="Heisei" Lang="ja" LawType="Act" Num="057" Year="15">
        <LawNum>平成十五年法律第五十七号</LawNum>
        <LawBody>
          <LawTitle>個人情報の保護に関する法律</LawTitle>
          <MainProvision>
            <Chapter Num="1">
              <ChapterTitle>第一章　総則</ChapterTitle>
              <Article Num="1">
                <ArticleCaption>（目的）</ArticleCaption>
                <ArticleTitle>第一条</ArticleTitle>
                <Paragraph Num="1">
                  <ParagraphNum/>
                  <ParagraphSentence><Sentence>この法律は、個人の権利利益を保護することを目的とする。</Sentence></ParagraphSentence>
                </Paragraph>
              </Article>
              <Article Num="2">
                <ArticleCaption>（定義）</ArticleCaption>
                <ArticleTitle>第二条</ArticleTitle>
                <Paragraph Num="1">
                  <ParagraphSentence><Sentence>この法律において「個人情報」とは、次の各号のいずれかに該当するものをいう。</Sentence></ParagraphSentence>
                  <Item Num="1">
                    <ItemTitle>一</ItemTitle>
                    <ItemSentence><Sentence>氏名、生年月日その他の記述等</Sentence></ItemSentence>
                  </Item>
                  <Item Num="2">
                    <ItemTitle>二</ItemTitle>
                    <ItemSentence>
                      <Column><Sentence>個人識別符号</Sentence></Column>
                      <Column><Sentence>が含まれるもの</Sentence></Column>
                    </ItemSentence>
                  </Item>
                </Paragraph>
              </Article>
            </Chapter>
            <Chapter Num="4">
              <ChapterTitle>第四章　個人情報取扱事業者等の義務等</ChapterTitle>
              <Section Num="1">
                <SectionTitle>第一節　総則</SectionTitle>
                <Article>
                  <ArticleTitle>第十七条</ArticleTitle>
                  <Paragraph Num="1">
                    <ParagraphSentence><Sentence>利用目的をできる限り特定しなければならない。</Sentence></ParagraphSentence>
                  </Paragraph>
                </Article>
              </Section>
            </Chapter>
          </MainProvision>
          <SupplProvision>
            <SupplProvisionLabel>附　則</SupplProvisionLabel>
            <Article Num="1">
              <ArticleTitle>第一条</ArticleTitle>
              <Paragraph Num="1">
                <ParagraphSentence><Sentence>この法律は、公布の日から施行する。</Sentence></ParagraphSentence>
              </Paragraph>
            </Article>
          </SupplProvision>
        </LawBody>
      </Law>
    </LawFullText>
  </ApplData>
</DataRoot>
"""

ERROR_XML = """<?xml version="1.0" encoding="UTF-8"?>
<DataRoot><Result><Code>1</Code><Message>該当するデータがありません</Message></Result></DataRoot>
"""

V2_LAW = {
    "tag": "Law",
    "attr": {"Era": "Reiwa", "Lang": "ja"},
    "children": [
        {"tag": "LawNum", "attr": {}, "children": ["令和元年法律第十六号"]},
        {"tag": "LawBody", "attr": {}, "children": [
            {"tag": "LawTitle", "attr": {}, "children": ["テスト法"]},
            {"tag": "MainProvision", "attr": {}, "children": [
                {"tag": "Article", "attr": {"Num": "1"}, "children": [
                    {"tag": "ArticleTitle", "attr": {}, "children": ["第一条"]},
                    {"tag": "Paragraph", "attr": {"Num": "1"}, "children": [
                        {"tag": "ParagraphSentence", "attr": {}, "children": [
                            {"tag": "Sentence", "attr": {}, "children": ["A & B <C>"]},
                        ]},
                    ]},
                ]},
            ]},
        ]},
    ],
}


class TestParseLawXml:

    def test_law_metadata(self):
        parsed = parse_law_xml('415AC0000000057', LAW_XML)
        assert parsed.law_num == '平成十五年法律第五十七号'
        assert parsed.law_name == '個人情報の保護に関する法律'
        assert [a.number for a in parsed.articles] == ['1', '2', '17']

    def test_structure_context(self):
        """章・節のタイトルが条に付く"""
        article_1, _, article_17 = parse_law_xml('415AC0000000057', LAW_XML).articles
        assert article_1.chapter == '第一章　総則'
        assert article_1.section is None
        assert article_17.chapter == '第四章　個人情報取扱事業者等の義務等'
        assert article_17.section == '第一節　総則'

    def test_number_from_article_title(self):
        """Num 属性がなければ ArticleTitle から条番号を得る"""
        article_17 = parse_law_xml('415AC0000000057', LAW_XML).articles[2]
        assert article_17.number == '17'
        assert article_17.caption == ''

    def test_items_and_columns(self):
        article_2 = parse_law_xml('415AC0000000057', LAW_XML).articles[1]
        assert article_2.caption == '（定義）'
        items = article_2.paragraphs[0].items
        assert [i.number for i in items] == ['1', '2']
        assert items[1].content == '個人識別符号　が含まれるもの'
        assert article_2.content.splitlines()[1] == '  1 氏名、生年月日その他の記述等'

    def test_supplementary_provisions(self):
        parsed = parse_law_xml('415AC0000000057', LAW_XML)
        assert len(parsed.supplementary_provisions) == 1
        assert parsed.supplementary_provisions[0].content == 'この法律は、公布の日から施行する。'

    def test_api_error(self):
        with pytest.raises(ValueError, match='該当するデータがありません'):
            parse_law_xml('BAD', ERROR_XML)

    def test_missing_law_element(self):
        with pytest.raises(ValueError, match='No Law element'):
            parse_law_xml('BAD', '<?xml version="1.0"?><Other/>')


class TestJsonToXml:

    def test_escaping(self):
        node = {"tag": "Sentence", "attr": {"Num": 'a"b'}, "children": ["A & B <c>"]}
        assert json_to_xml(node) == '<Sentence Num="a&quot;b">A &amp; B &lt;c&gt;</Sentence>'

    def test_empty_element(self):
        assert json_to_xml({"tag": "ParagraphNum", "attr": {}, "children": []}) == '<ParagraphNum/>'

    def test_v2_tree_parses(self):
        parsed = parse_law_xml('501AC0000000016', json_to_xml(V2_LAW))
        assert parsed.law_name == 'テスト法'
        assert parsed.articles[0].content == 'A & B <C>'


class FakeResponseClient(EGovClient):
    """get() を差し替えた EGovClient"""

    def __init__(self, responses, **kwargs):
        super().__init__(**kwargs)
        self.responses = responses
        self.requested = []

    def get(self, url, params=None, cache_key=None, response_type="json", timeout=None):
        self.requested.append(url)
        response = self.responses.get(url)
        if isinstance(response, Exception):
            raise response
        return response


class TestEGovClient:

    def test_v2_json_converted(self, tmp_path):
        client = FakeResponseClient(
            {f"{EGOV_API_V2_BASE_URL}/law_data/X": {"law_full_text": V2_LAW}},
            cache_dir=tmp_path,
        )
        xml = client.fetch_law_xml('X')
        assert xml.startswith('<?xml')
        assert '<LawTitle>テスト法</LawTitle>' in xml

    def test_fallback_to_v1(self, tmp_path):
        client = FakeResponseClient({
            f"{EGOV_API_V2_BASE_URL}/law_data/X": requests.ConnectionError('down'),
            f"{EGOV_API_BASE_URL}/lawdata/X": LAW_XML,
        }, cache_dir=tmp_path)
        assert client.fetch_law_xml('X') == LAW_XML
        assert len(client.requested) == 2

    def test_both_fail(self, tmp_path):
        client = FakeResponseClient({
            f"{EGOV_API_V2_BASE_URL}/law_data/X": requests.ConnectionError('down'),
            f"{EGOV_API_BASE_URL}/lawdata/X": requests.HTTPError('500'),
        }, cache_dir=tmp_path)
        with pytest.raises(RuntimeError):
            client.fetch_law_xml('X')

    def test_cache_hit(self, tmp_path):
        client = FakeResponseClient({}, cache_dir=tmp_path)
        client.save_cache('egov_law_X', '<Law/>')
        assert client.fetch_law_xml('X') == '<Law/>'
        assert client.requested == []

    def test_corrupted_cache_ignored(self, tmp_path):
        client = FakeResponseClient({}, cache_dir=tmp_path)
        client.cache_path('k').write_text('{not json', encoding='utf-8')
        assert client.load_cache('k') is None


class StaticClient:
    def __init__(self, documents):
        self.documents = documents

    def fetch_law_xml(self, law_id):
        if law_id not in self.documents:
            raise RuntimeError(f"Failed to fetch law {law_id} from both v1 and v2 APIs")
        return self.documents[law_id]


class TestIngest:

    def test_build_seed(self):
        parsed = parse_law_xml('415AC0000000057', LAW_XML)
        seed = build_seed(parsed, {'law_id': '415AC0000000057', 'short_name': 'APPI'})
        assert seed['id'] == 'act-57-2003'
        assert seed['short_name'] == 'APPI'
        assert seed['url'].endswith('/law/415AC0000000057')
        assert [p['provision_ref'] for p in seed['provisions']] == ['art-1', 'art-2', 'art-17']
        assert seed['provisions'][2]['chapter'] == '第四章　個人情報取扱事業者等の義務等'

    def test_load_targets_default(self):
        assert load_targets(None) == KEY_LAWS

    def test_load_targets_formats(self, tmp_path):
        path = tmp_path / 'targets.yaml'
        path.write_text(yaml.dump({'targets': ['A', {'law_id': 'B', 'short_name': 'b'}, {'x': 1}]}),
                        encoding='utf-8')
        assert load_targets(path) == [{'law_id': 'A'}, {'law_id': 'B', 'short_name': 'b'}]

    def test_load_targets_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_targets(tmp_path / 'missing.yaml')

    def test_ingest_report(self, tmp_path):
        targets = tmp_path / 'targets.yaml'
        targets.write_text(json.dumps(['415AC0000000057', 'MISSING']), encoding='utf-8')
        seed_dir = tmp_path / 'seed'

        report = Ingester(seed_dir, targets, client=StaticClient({'415AC0000000057': LAW_XML})).ingest()

        assert report['total_targets'] == 2
        assert report['success'] == ['415AC0000000057']
        assert report['failed'][0]['id'] == 'MISSING'
        seed = load_seed_file(seed_dir / '415AC0000000057.yaml')
        assert seed['title'] == '個人情報の保護に関する法律'
        assert len(seed['provisions']) == 3
