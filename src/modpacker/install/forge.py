"""
Forge 설치 관리 모듈

Forge는 버전별로 한 번만 설치하고 여러 모드팩이 공유합니다.
설치 여부는 레지스트리의 ``forge_versions``로 판단합니다.

상태 전이: ABSENT → INSTALLING → PRESENT
설치 프로그램이 실패하면 ABSENT로 돌아가며 레지스트리에는 아무것도 기록되지 않습니다.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from enum import Enum
from pathlib import Path
from typing import Callable, Dict

from ..errors import DependencyInstallError
from ..modpack.models import Modpack
from ..registry.store import Registry
from ..utils.fs import remove_tree
from .downloader import download_file

logger = logging.getLogger(__name__)

MAVEN_BASE = "https://maven.minecraftforge.net/net/minecraftforge/forge"


class ForgeState(str, Enum):
    ABSENT = "absent"
    INSTALLING = "installing"
    PRESENT = "present"


def forge_maven_coord(modpack: Modpack) -> str:
    return f"{modpack.minecraft.version}-{modpack.forge.version}"


def forge_installer_url(modpack: Modpack) -> str:
    """
    Forge 설치 프로그램 URL

    예: 1.12.2 / 14.23.5.2847 →
    https://maven.minecraftforge.net/net/minecraftforge/forge/1.12.2-14.23.5.2847/forge-1.12.2-14.23.5.2847-installer.jar
    """
    coord = forge_maven_coord(modpack)
    return f"{MAVEN_BASE}/{coord}/forge-{coord}-installer.jar"


def forge_version_id(modpack: Modpack) -> str:
    """런처가 사용하는 버전 식별자: {mc}-forge{mc}-{forge}"""
    mc = modpack.minecraft.version
    return f"{mc}-forge{mc}-{modpack.forge.version}"


def run_java_installer(jar_path: Path) -> None:
    """java -jar 로 Forge 설치 프로그램을 실행합니다."""
    java = shutil.which("java")
    if not java:
        raise DependencyInstallError("java를 찾을 수 없습니다. Java를 설치하고 PATH에 추가하세요.")

    logger.info(f"Forge 설치 프로그램 실행: {jar_path}")
    try:
        completed = subprocess.run([java, "-jar", str(jar_path)], cwd=jar_path.parent)
    except OSError as e:
        raise DependencyInstallError(f"java 실행 실패: {e}") from e

    if completed.returncode != 0:
        raise DependencyInstallError(
            f"java exited with a non-zero exit code ({completed.returncode})"
        )


class ForgeInstaller:
    """레지스트리를 기준으로 Forge 설치를 중복 없이 수행하는 클래스"""

    def __init__(
        self,
        downloader: Callable[[str, Path], Path] = download_file,
        runner: Callable[[Path], None] = run_java_installer,
    ):
        """
        Args:
            downloader: (url, 저장 경로) → 저장된 경로
            runner: 설치 프로그램 jar 경로를 받아 설치를 수행 (실패 시 예외)
        """
        self.downloader = downloader
        self.runner = runner
        self.states: Dict[str, ForgeState] = {}

    def state_of(self, version: str, registry: Registry) -> ForgeState:
        if version in registry.forge_versions:
            return ForgeState.PRESENT
        # 레지스트리에 기록되지 않은 설치는 없는 것으로 취급
        state = self.states.get(version, ForgeState.ABSENT)
        return ForgeState.ABSENT if state is ForgeState.PRESENT else state

    def ensure_installed(self, modpack: Modpack, registry: Registry) -> bool:
        """
        모드팩에 필요한 Forge가 없으면 설치합니다.

        Args:
            modpack: 설치 중인 모드팩
            registry: 메모리상의 레지스트리 (성공 시 forge_versions에 추가)

        Returns:
            bool: 이번 호출에서 설치를 수행했는지 여부

        Raises:
            NetworkError: 설치 프로그램 다운로드 실패
            DependencyInstallError: 설치 프로그램 실행 실패
        """
        version = modpack.forge.version
        if not version:
            return False

        if self.state_of(version, registry) is ForgeState.PRESENT:
            logger.info(f"Forge {version}은(는) 이미 설치되어 있습니다")
            return False

        self.states[version] = ForgeState.INSTALLING
        try:
            self._install(modpack)
        except BaseException:
            self.states[version] = ForgeState.ABSENT
            raise

        registry.forge_versions.add(version)
        self.states[version] = ForgeState.PRESENT
        logger.info(f"Forge {forge_version_id(modpack)} 설치 완료")
        return True

    def _install(self, modpack: Modpack) -> None:
        work_dir = Path(tempfile.mkdtemp(prefix="modpacker-forge-"))
        try:
            logger.info("Forge 다운로드 중...")
            jar_path = self.downloader(
                forge_installer_url(modpack), work_dir / "forge-installer.jar"
            )
            self.runner(Path(jar_path))
        finally:
            remove_tree(work_dir)

