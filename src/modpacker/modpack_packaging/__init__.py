"""
모드팩 배포본 패키징 모듈

모드팩 폴더를 배포 가능한 tar.gz 아카이브로 패키징합니다.
- 전체 배포본: 모든 모드 포함
- 서버 배포본: client 전용 모드 제외
"""

from .archive import (
    ArchiveBundler,
    archive_basename,
    full_archive_name,
    server_archive_name,
)
from .base import BasePackager, PackagingResult
from .manager import PackageManager

__all__ = [
    "ArchiveBundler",
    "BasePackager",
    "PackageManager",
    "PackagingResult",
    "archive_basename",
    "full_archive_name",
    "server_archive_name",
]
