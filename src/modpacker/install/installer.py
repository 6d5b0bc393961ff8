"""
모드팩 설치 모듈

배포된 모드팩 아카이브를 받아 마인크래프트 폴더의 modpacks/ 아래에 설치합니다.

1. 임시 스테이징 폴더에 아카이브 다운로드 (로컬 파일은 복사)
2. 스테이징 폴더에 압축 해제
3. modpack.yaml 로드
4. 설치 폴더 결정 (이름 정규화, 항상 modpacks/ 내부)
5. 필요한 Forge 버전이 레지스트리에 없으면 설치
6. mods, config, modpack.yaml을 설치 폴더로 교체 복사
7. 런처 프로필 등록
8. 레지스트리 갱신 및 저장
9. 스테이징 폴더 정리 (실패해도 원래 오류를 가리지 않음)
"""

from __future__ import annotations

import logging
import os
import posixpath
import re
import secrets
import shutil
import tarfile
import tempfile
from pathlib import Path
from typing import Callable, Optional, Union

from ..errors import (
    ArchiveError,
    ConfigError,
    ModpackerError,
    ModpackIOError,
    ValidationError,
)
from ..modpack.manifest import MANIFEST_FILENAME, load_modpack_config
from ..modpack.models import Modpack
from ..registry.store import JsonRegistryStore, RegistryStore
from ..utils.fs import published_mode, remove_tree
from .downloader import download_file
from .forge import ForgeInstaller
from .profiles import ensure_launcher_profile

logger = logging.getLogger(__name__)

MODPACKS_DIR = "modpacks"
PACK_CONTENTS = ("mods", "config")

_LEADING_PARENT_RE = re.compile(r"^(\.\.(/|$))+")


def sanitize_modpack_name(name: str) -> str:
    """
    모드팩 이름을 설치 폴더 이름으로 변환합니다.

    경로를 정규화한 뒤 앞쪽의 ``../`` 와 ``/`` 를 제거하고 소문자로 바꿉니다.
    예: ``"../../Escape"`` → ``"escape"``

    Raises:
        ValidationError: 정규화 후 이름이 비어 있는 경우
    """
    normalized = posixpath.normpath(name.replace("\\", "/"))
    normalized = _LEADING_PARENT_RE.sub("", normalized).lstrip("/").lower()

    if normalized in ("", ".", ".."):
        raise ValidationError(f"모드팩 이름으로 설치 폴더를 만들 수 없습니다: {name!r}")
    return normalized


def extract_archive(archive_path: Path, dest_dir: Path) -> None:
    """tar(.gz) 아카이브를 압축 해제합니다. 절대 경로, 상위 경로 탈출 항목은 거부됩니다."""
    logger.info("모드팩 압축 해제 중...")
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        with tarfile.open(archive_path, "r:*") as tar:
            tar.extractall(dest_dir, filter="data")
    except (tarfile.TarError, OSError) as e:
        raise ArchiveError(f"모드팩 압축 해제 실패 ({archive_path}): {e}") from e


class ModpackInstaller:
    """모드팩 아카이브를 설치하고 레지스트리에 기록하는 클래스"""

    def __init__(
        self,
        minecraft_home: Union[str, Path],
        registry_store: Optional[RegistryStore] = None,
        downloader: Callable[[str, Path], Path] = download_file,
        forge_installer: Optional[ForgeInstaller] = None,
        register_profile: bool = True,
    ):
        """
        Args:
            minecraft_home: 마인크래프트 폴더 (modpacks/, launcher_profiles.json 위치)
            registry_store: 레지스트리 저장소 (기본값: minecraft_home/modpacker.json)
            downloader: (locator, 저장 경로) → 저장된 경로
            forge_installer: Forge 설치기 (기본값: ForgeInstaller())
            register_profile: 런처 프로필 등록 여부
        """
        self.minecraft_home = Path(minecraft_home)
        self.registry_store = registry_store or JsonRegistryStore.for_home(
            self.minecraft_home
        )
        self.downloader = downloader
        self.forge_installer = forge_installer or ForgeInstaller()
        self.register_profile = register_profile

    @property
    def modpacks_root(self) -> Path:
        return self.minecraft_home / MODPACKS_DIR

    def install_dir_for(self, name: str) -> Path:
        """
        모드팩 이름에 해당하는 설치 폴더를 반환합니다.

        Raises:
            ValidationError: 결과 경로가 modpacks/ 내부가 아닌 경우
        """
        root = self.modpacks_root.resolve()
        target = (root / sanitize_modpack_name(name)).resolve()
        if root not in target.parents:
            raise ValidationError(
                f"설치 폴더가 {root} 밖을 가리킵니다: {name!r} → {target}"
            )
        return target

    async def install(self, locator: str) -> Modpack:
        """
        모드팩을 설치합니다.

        Args:
            locator: 로컬 경로, file:// URL 또는 http(s) URL

        Returns:
            Modpack: 설치된 모드팩

        Raises:
            ConfigError: 아카이브가 올바른 모드팩이 아닌 경우
            ValidationError: 모드팩 이름으로 설치 폴더를 만들 수 없는 경우
            NetworkError, ArchiveError, ModpackIOError, DependencyInstallError
        """
        registry = self.registry_store.load()
        staging_dir = Path(tempfile.mkdtemp(prefix="modpacker-"))

        try:
            logger.info("모드팩 다운로드 중...")
            archive_path = self.downloader(locator, staging_dir / "modpack.tar.gz")

            pack_dir = staging_dir / "pack"
            extract_archive(Path(archive_path), pack_dir)

            try:
                modpack = await load_modpack_config(pack_dir / MANIFEST_FILENAME)
            except ModpackerError as e:
                raise ConfigError(
                    f"Failed to load {MANIFEST_FILENAME} from modpack. (is this a modpack?): {e}"
                ) from e

            install_dir = self.install_dir_for(modpack.name)
            logger.info(f"모드팩 {modpack.name} v{modpack.version} 설치 위치: {install_dir}")

            self.forge_installer.ensure_installed(modpack, registry)

            self._replace_install_dir(pack_dir, install_dir)

            if self.register_profile:
                ensure_launcher_profile(self.minecraft_home, modpack, install_dir)

            registry.installed_modpacks[modpack.name] = modpack
            self.registry_store.save(registry)
        finally:
            remove_tree(staging_dir)

        logger.info(f"모드팩 설치 완료: {modpack.name}")
        return modpack

    def _replace_install_dir(self, pack_dir: Path, install_dir: Path) -> None:
        """
        스테이징된 내용을 설치 폴더 옆의 임시 폴더에 복사한 뒤 교체합니다.

        복사가 끝나기 전에는 기존 설치를 건드리지 않습니다.
        """
        try:
            install_dir.parent.mkdir(parents=True, exist_ok=True)
            new_dir = Path(
                tempfile.mkdtemp(prefix=f".{install_dir.name}.", dir=install_dir.parent)
            )
        except OSError as e:
            raise ModpackIOError(f"설치 폴더를 준비할 수 없습니다 ({install_dir}): {e}") from e

        old_dir: Optional[Path] = None
        try:
            for name in PACK_CONTENTS:
                src = pack_dir / name
                if src.is_dir():
                    shutil.copytree(src, new_dir / name)
            shutil.copy2(pack_dir / MANIFEST_FILENAME, new_dir / MANIFEST_FILENAME)
            os.chmod(new_dir, published_mode(is_dir=True))

            if install_dir.exists():
                old_dir = install_dir.with_name(
                    f".{install_dir.name}.old-{secrets.token_hex(4)}"
                )
                os.replace(install_dir, old_dir)
            os.replace(new_dir, install_dir)
        except OSError as e:
            remove_tree(new_dir)
            if old_dir is not None and not install_dir.exists():
                self._restore(old_dir, install_dir)
            raise ModpackIOError(f"모드팩 파일 복사 실패 ({install_dir}): {e}") from e

        if old_dir is not None:
            remove_tree(old_dir)

    @staticmethod
    def _restore(old_dir: Path, install_dir: Path) -> None:
        try:
            os.replace(old_dir, install_dir)
        except OSError as e:
            logger.warning(f"기존 설치 복원 실패 ({old_dir} → {install_dir}): {e}")
