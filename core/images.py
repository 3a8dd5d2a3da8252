"""
商品图片：按名称在 Pexels 搜索，依次尝试下载候选图片，第一张成功的写入存储盘。

配置说明：https://www.pexels.com/api/documentation/
图片是可选的补充信息，搜索或下载失败均只记录日志并返回 None，不抛给调用方。
"""

from __future__ import annotations

import logging
import secrets
import string
from pathlib import PurePosixPath
from urllib.parse import urlparse

import httpx

from domain.catalog import DownloadAttempt, ImageCandidate

from .storage import DiskManager

logger = logging.getLogger(__name__)

PEXELS_SEARCH_URL = "https://api.pexels.com/v1/search"
DOWNLOAD_TIMEOUT = 10.0
TOKEN_LENGTH = 26
_TOKEN_ALPHABET = string.ascii_letters + string.digits


def random_token(length: int = TOKEN_LENGTH) -> str:
    """随机文件名：大小写字母与数字。"""
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(length))


def url_extension(url: str) -> str:
    """从 URL 路径取扩展名（不含点），忽略查询串。"""
    return PurePosixPath(urlparse(url).path).suffix.lstrip(".")


def build_image_path(folder: str, url: str, token: str | None = None) -> str:
    """<folder>/<随机 26 位>.<扩展名>；URL 无扩展名时不带点。"""
    name = token or random_token()
    ext = url_extension(url)
    filename = f"{name}.{ext}" if ext else name
    folder = folder.strip().strip("/")
    return f"{folder}/{filename}" if folder else filename


class ImageResolver:
    """按名称搜索并保存商品图片。"""

    def __init__(
        self,
        api_key: str,
        storage: DiskManager,
        *,
        search_url: str = PEXELS_SEARCH_URL,
        timeout: float = DOWNLOAD_TIMEOUT,
        orientation: str = "square",
        size: str = "small",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.storage = storage
        self.search_url = search_url
        self.timeout = timeout
        self.orientation = orientation
        self.size = size
        self._transport = transport

    def _client(self, **kwargs) -> httpx.Client:
        return httpx.Client(transport=self._transport, follow_redirects=True, **kwargs)

    def search(self, title: str) -> list[ImageCandidate] | None:
        """
        搜索图片，返回候选列表（顺序与接口返回一致）。
        请求失败、状态码非 2xx 或返回不是 JSON 时返回 None。
        """
        params = {"query": title, "orientation": self.orientation, "size": self.size}
        try:
            with self._client(headers={"Authorization": self.api_key}, timeout=self.timeout) as client:
                response = client.get(self.search_url, params=params)
        except httpx.HTTPError as e:
            logger.warning("图片搜索请求失败 [%s]: %s", title[:80], e)
            return None
        if not response.is_success:
            logger.warning("图片搜索失败 [%s]: HTTP %d", title[:80], response.status_code)
            return None
        try:
            data = response.json()
        except ValueError as e:
            logger.warning("图片搜索返回内容无法解析 [%s]: %s", title[:80], e)
            return None
        photos = data.get("photos") if isinstance(data, dict) else None
        return [ImageCandidate.from_photo(p) for p in photos or [] if isinstance(p, dict)]

    def download(self, url: str) -> DownloadAttempt:
        """下载单张图片；传输异常与非 2xx 状态都作为失败结果返回，不抛异常。"""
        if not url:
            return DownloadAttempt(url=url, ok=False, error="候选图片缺少原图地址")
        try:
            with self._client(timeout=self.timeout) as client:
                response = client.get(url)
        except httpx.HTTPError as e:
            return DownloadAttempt(url=url, ok=False, error=f"{type(e).__name__}: {e}")
        if not response.is_success:
            return DownloadAttempt(url=url, ok=False, status_code=response.status_code, error=f"HTTP {response.status_code}")
        return DownloadAttempt(url=url, ok=True, status_code=response.status_code, content=response.content)

    def find_image(self, title: str, folder: str, disk: str | None = None) -> str | None:
        """
        搜索并保存一张图片，返回存储盘上的相对路径；未获取到时返回 None。
        并非每个 URL 都能下载，失败时依次尝试下一个搜索结果。
        """
        candidates = self.search(title)
        if candidates is None:
            return None
        if not candidates:
            logger.info("图片搜索无结果 [%s]", title[:80])
            return None

        for idx, candidate in enumerate(candidates, 1):
            attempt = self.download(candidate.original_url)
            if not attempt.ok:
                logger.info("  候选图片 %d/%d 下载失败: %s | %s", idx, len(candidates), attempt.error, attempt.url)
                continue
            image_path = build_image_path(folder, attempt.url)
            self.storage.disk(disk).put(image_path, attempt.content)
            logger.info("图片已保存 [%s]: %s（候选 %d/%d）", title[:80], image_path, idx, len(candidates))
            return image_path

        logger.warning("图片候选均下载失败 [%s]，共 %d 个", title[:80], len(candidates))
        return None
