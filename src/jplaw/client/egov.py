from typing import Any, Optional
import logging

import requests

from .base import BaseClient
from ..config import EGOV_API_BASE_URL, EGOV_API_V2_BASE_URL

logger = logging.getLogger(__name__)


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr(value: Any) -> str:
    return _escape(str(value)).replace('"', "&quot;")


def json_to_xml(node: Any) -> str:
    """
    Convert v2 API JSON tree structure to XML string.

    v2 format:
    {
        "tag": "Law",
        "attr": {"Era": "Heisei", ...},
        "children": [
            {"tag": "LawNum", "attr": {}, "children": ["平成十五年法律第五十七号"]},
            ...
        ]
    }

    Returns:
        XML string in the same element vocabulary as the v1 lawdata response
    """
    if isinstance(node, str):
        return _escape(node)
    if not isinstance(node, dict):
        return _escape(str(node))

    tag = node.get("tag", "")
    attrs = "".join(
        f' {k}="{_escape_attr(v)}"'
        for k, v in (node.get("attr") or {}).items()
    )
    children = node.get("children") or []

    if not children:
        return f"<{tag}{attrs}/>"
    inner = "".join(json_to_xml(child) for child in children)
    return f"<{tag}{attrs}>{inner}</{tag}>"


class EGovClient(BaseClient):
    """e-Gov 法令API クライアント（v2 優先、v1 フォールバック）"""

    def __init__(self, **kwargs):
        kwargs.setdefault("rate_limit_sec", 0.5)
        super().__init__(**kwargs)
        self.base_url = EGOV_API_BASE_URL
        self.base_url_v2 = EGOV_API_V2_BASE_URL
        self.timeout_v2 = 60
        self.timeout_v1 = 180

    def fetch_law_xml(self, law_id: str) -> str:
        """
        法令本文の XML を取得

        1. キャッシュ
        2. v2 API（JSON を XML に変換）
        3. v1 API

        Raises:
            RuntimeError: v1 / v2 のどちらでも取得できなかった場合
        """
        cache_key = f"egov_law_{law_id}"
        cached = self.load_cache(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit: {cache_key}")
            return cached

        xml_content = self._fetch_law_xml_v2(law_id)
        if xml_content is None:
            logger.info(f"Falling back to v1 API for {law_id}")
            xml_content = self._fetch_law_xml_v1(law_id)

        if xml_content is None:
            raise RuntimeError(f"Failed to fetch law {law_id} from both v1 and v2 APIs")

        self.save_cache(cache_key, xml_content)
        return xml_content

    def _fetch_law_xml_v2(self, law_id: str) -> Optional[str]:
        url = f"{self.base_url_v2}/law_data/{law_id}"
        try:
            data = self.get(url, timeout=self.timeout_v2)
        except requests.RequestException as e:
            logger.warning(f"v2 API error for {law_id}: {type(e).__name__}: {e}")
            return None
        except ValueError as e:
            logger.warning(f"v2 API returned invalid JSON for {law_id}: {e}")
            return None

        law_full_text = data.get("law_full_text") if isinstance(data, dict) else None
        if not law_full_text:
            logger.warning(f"v2 API returned no law_full_text for {law_id}")
            return None

        logger.info(f"Successfully fetched {law_id} via v2 API")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{json_to_xml(law_full_text)}'

    def _fetch_law_xml_v1(self, law_id: str) -> Optional[str]:
        url = f"{self.base_url}/lawdata/{law_id}"
        try:
            xml_content = self.get(url, response_type="text", timeout=self.timeout_v1)
        except requests.RequestException as e:
            logger.error(f"v1 API error for {law_id}: {type(e).__name__}: {e}")
            return None

        logger.info(f"Successfully fetched {law_id} via v1 API")
        return xml_content
