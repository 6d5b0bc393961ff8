import logging
import os
from pathlib import Path
from typing import List, Optional

from ..errors import ModpackIOError
from .diff import build_modpack
from .manifest import MANIFEST_FILENAME, load_modpack_config
from .models import Modpack, ModpackGeneration

logger = logging.getLogger(__name__)


class ModpackLoader:
    """모드팩 폴더에서 매니페스트와 모드 파일들을 읽어 빌드 결과를 만드는 클래스"""

    MODS_DIR = "mods"

    def __init__(self, modpack_path: str):
        """
        ModpackLoader 초기화

        Args:
            modpack_path: 모드팩 폴더 경로 (modpack.yaml, mods/ 포함)
        """
        self.modpack_path = Path(modpack_path)

        self.modpack: Optional[Modpack] = None
        self.mod_files: List[str] = []

    @property
    def manifest_path(self) -> Path:
        return self.modpack_path / MANIFEST_FILENAME

    @property
    def mods_path(self) -> Path:
        return self.modpack_path / self.MODS_DIR

    async def load_modpack(self) -> Modpack:
        """modpack.yaml을 읽어옵니다."""
        logger.info(f"모드팩 로딩 시작: {self.modpack_path}")
        self.modpack = await load_modpack_config(self.manifest_path)
        return self.modpack

    def list_mod_files(self) -> List[str]:
        """
        mods 폴더의 파일 목록을 반환합니다.

        하위 디렉토리는 제외하며, 이름순으로 정렬된 결과가
        새 모드가 추가되는 순서가 됩니다.

        Returns:
            List[str]: mods 폴더 기준 파일명 목록
        """
        try:
            with os.scandir(self.mods_path) as entries:
                mod_files = sorted(
                    entry.name for entry in entries if not entry.is_dir()
                )
        except OSError as e:
            raise ModpackIOError(
                f"mods 폴더를 읽을 수 없습니다 ({self.mods_path}): {e}"
            ) from e

        logger.info(f"mods 폴더에서 {len(mod_files)}개 파일 발견")
        self.mod_files = mod_files
        return mod_files

    async def build(self) -> ModpackGeneration:
        """
        매니페스트를 읽고 디스크의 모드 목록과 비교한 결과를 반환합니다.

        Returns:
            ModpackGeneration: 갱신된 모드팩과 변경 사항
        """
        modpack = self.modpack or await self.load_modpack()
        mod_files = self.list_mod_files()
        return build_modpack(modpack, mod_files)

    def get_build_stats(self, generation: ModpackGeneration) -> dict:
        """빌드 결과 통계를 반환합니다."""
        mods = generation.modpack.mods
        client_mods = sum(1 for mod in mods if mod.client)
        return {
            "total_mods": len(mods),
            "client_mods": client_mods,
            "server_mods": len(mods) - client_mods,
            "new_mods": len(generation.changes.new_mods),
            "removed_mods": len(generation.changes.removed_mods),
        }
