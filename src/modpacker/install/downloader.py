"""
모드팩 아카이브, Forge 설치 프로그램 다운로드 유틸리티

로컬 경로와 file:// URL은 복사하고, http(s) URL은 requests로 스트리밍합니다.
일시적인 네트워크 오류(연결 실패, 타임아웃, 5xx)는 제한된 횟수만큼 재시도합니다.
"""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import Union
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

import requests

from ..errors import ModpackIOError, NetworkError

logger = logging.getLogger(__name__)

USER_AGENT = "modpacker/1.0"
# (연결, 읽기) 타임아웃 초
DOWNLOAD_TIMEOUT = (10, 120)
DOWNLOAD_TRIES_MAX = 3
DOWNLOAD_RETRY_BACKOFF = 1.0
CHUNK_SIZE = 1024 * 128


def is_remote(locator: str) -> bool:
    return urlparse(locator).scheme.lower() in ("http", "https")


def local_path_from_locator(locator: str) -> Path:
    """로컬 경로 또는 file:// URL을 Path로 변환합니다."""
    parsed = urlparse(locator)
    if parsed.scheme.lower() == "file":
        return Path(url2pathname(unquote(parsed.path)))
    return Path(locator).expanduser()


def download_file(locator: str, dest_file: Union[str, Path]) -> Path:
    """
    locator가 가리키는 파일을 dest_file로 가져옵니다.

    Args:
        locator: 로컬 경로, file:// URL 또는 http(s) URL
        dest_file: 저장할 경로

    Returns:
        Path: 저장된 파일 경로

    Raises:
        NetworkError: 원격 다운로드 실패 (재시도 후)
        ModpackIOError: 로컬 파일 복사 실패
    """
    dest_file = Path(dest_file)
    dest_file.parent.mkdir(parents=True, exist_ok=True)

    if not is_remote(locator):
        src = local_path_from_locator(locator)
        logger.info(f"로컬 파일 복사: {src} → {dest_file}")
        try:
            shutil.copyfile(src, dest_file)
        except OSError as e:
            raise ModpackIOError(f"파일을 복사할 수 없습니다 ({src}): {e}") from e
        return dest_file

    for attempt in range(1, DOWNLOAD_TRIES_MAX + 1):
        try:
            _stream_download(locator, dest_file)
            return dest_file
        except _RetryableDownloadError as e:
            if attempt >= DOWNLOAD_TRIES_MAX:
                raise NetworkError(
                    f"다운로드 실패 ({locator}), {attempt}회 시도: {e}"
                ) from e
            wait = DOWNLOAD_RETRY_BACKOFF * (2 ** (attempt - 1))
            logger.warning(
                f"다운로드 실패, {wait:.0f}초 후 재시도합니다 ({attempt}/{DOWNLOAD_TRIES_MAX}): {e}"
            )
            time.sleep(wait)

    # range가 비어 있지 않으므로 도달하지 않음
    raise NetworkError(f"다운로드 실패: {locator}")


class _RetryableDownloadError(Exception):
    pass


# 본문 수신 중 연결이 끊긴 경우도 재시도 대상
_TRANSIENT_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
    requests.exceptions.ContentDecodingError,
)


def _stream_download(url: str, dest_file: Path) -> None:
    logger.info(f"다운로드 중: {url}")
    headers = {"User-Agent": USER_AGENT, "Accept": "*/*"}

    try:
        with requests.get(
            url, headers=headers, stream=True, timeout=DOWNLOAD_TIMEOUT, allow_redirects=True
        ) as r:
            if r.status_code >= 500:
                raise _RetryableDownloadError(f"HTTP {r.status_code}")
            try:
                r.raise_for_status()
            except requests.exceptions.HTTPError as e:
                raise NetworkError(f"다운로드 실패 ({url}): {e}") from e

            with open(dest_file, "wb") as f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
    except _TRANSIENT_ERRORS as e:
        raise _RetryableDownloadError(str(e)) from e
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"다운로드 실패 ({url}): {e}") from e
    except OSError as e:
        raise ModpackIOError(f"다운로드 파일 저장 실패 ({dest_file}): {e}") from e

    logger.info(f"다운로드 완료: {dest_file} ({dest_file.stat().st_size} bytes)")
