import hashlib
import json
import time
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from ..config import CACHE_DIR, USER_AGENT

logger = logging.getLogger(__name__)


class BaseClient:
    """
    キャッシュ・レート制限付き HTTP クライアント

    レスポンスは md5(cache_key).json としてキャッシュディレクトリに保存する。
    """

    def __init__(self, cache_dir: Path = CACHE_DIR, rate_limit_sec: float = 0.5, timeout: float = 60.0):
        self.cache_dir = Path(cache_dir)
        self.rate_limit_sec = rate_limit_sec
        self.timeout = timeout
        self.last_request_time = 0.0
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    def cache_path(self, key: str) -> Path:
        hashed = hashlib.md5(key.encode("utf-8")).hexdigest()
        return self.cache_dir / f"{hashed}.json"

    def load_cache(self, key: str) -> Optional[Any]:
        path = self.cache_path(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError:
            logger.warning(f"Corrupted cache file: {path}")
            return None

    def save_cache(self, key: str, data: Any) -> None:
        with open(self.cache_path(key), "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def _wait_rate_limit(self) -> None:
        elapsed = time.time() - self.last_request_time
        if elapsed < self.rate_limit_sec:
            time.sleep(self.rate_limit_sec - elapsed)

    def get(self, url: str, params: Optional[Dict] = None, cache_key: Optional[str] = None,
            response_type: str = "json", timeout: Optional[float] = None) -> Any:
        """
        GET リクエスト（cache_key 指定時はキャッシュを優先）

        Raises:
            requests.RequestException: 通信失敗・HTTP エラー
        """
        if cache_key:
            cached = self.load_cache(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit: {cache_key}")
                return cached

        self._wait_rate_limit()

        logger.info(f"Fetching: {url}")
        try:
            resp = self.session.get(url, params=params, timeout=timeout or self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise
        finally:
            self.last_request_time = time.time()

        data = resp.json() if response_type == "json" else resp.text
        if cache_key:
            self.save_cache(cache_key, data)
        return data
