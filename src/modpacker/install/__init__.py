"""
모드팩 설치 모듈

- 모드팩 아카이브 다운로드 및 압축 해제
- Forge 버전별 1회 설치
- 마인크래프트 폴더의 modpacks/ 아래로 설치 및 레지스트리 기록
"""

from .downloader import download_file
from .forge import (
    ForgeInstaller,
    ForgeState,
    forge_installer_url,
    forge_version_id,
    run_java_installer,
)
from .installer import ModpackInstaller, extract_archive, sanitize_modpack_name
from .profiles import ensure_launcher_profile, launcher_version_id

__all__ = [
    "ForgeInstaller",
    "ForgeState",
    "ModpackInstaller",
    "download_file",
    "ensure_launcher_profile",
    "extract_archive",
    "forge_installer_url",
    "forge_version_id",
    "launcher_version_id",
    "run_java_installer",
    "sanitize_modpack_name",
]
