"""
패키징 관리자 모듈

모드팩 빌드 전체 과정(매니페스트 로드 → 모드 비교 → 아카이브 생성)을 조정합니다.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from ..modpack.load import ModpackLoader
from ..modpack.models import ModpackGeneration
from .archive import ArchiveBundler
from .base import PackagingResult

logger = logging.getLogger(__name__)


class PackageManager:
    """모드팩 빌드 작업을 관리하는 클래스"""

    def __init__(self, bundler: Optional[ArchiveBundler] = None):
        """
        Args:
            bundler: 아카이브 패키저 (기본값: ArchiveBundler)
        """
        self.bundler = bundler or ArchiveBundler()
        self.last_results: Dict[str, PackagingResult] = {}

    async def build(self, modpack_path: Path, output_dir: Path) -> ModpackGeneration:
        """
        모드팩 폴더를 빌드하여 배포용 아카이브를 생성합니다.

        Args:
            modpack_path: 모드팩 폴더
            output_dir: 아카이브 출력 디렉토리

        Returns:
            ModpackGeneration: 갱신된 모드팩과 변경 사항
        """
        modpack_path = Path(modpack_path)
        output_dir = Path(output_dir)

        loader = ModpackLoader(str(modpack_path))
        modpack = await loader.load_modpack()
        logger.info(f"모드팩 빌드: {modpack.name} 버전 {modpack.version}")

        generation = await loader.build()
        self._log_changes(generation)

        logger.info("모드팩 배포본 생성 중...")
        self.last_results = await self.bundler.package(
            generation.modpack, modpack_path, output_dir
        )
        self._log_packaging_summary(self.last_results)

        return generation

    def _log_changes(self, generation: ModpackGeneration) -> None:
        changes = generation.changes
        if changes.is_empty:
            logger.warning(
                "추가되거나 제거된 모드가 없습니다. config나 옵션을 수정한 경우가 아니라면 변경 사항이 없습니다."
            )
        else:
            logger.info(f"{len(changes.new_mods)}개 모드가 추가되었습니다")

        if changes.removed_mods:
            logger.warning(
                f"이전 릴리스에서 {len(changes.removed_mods)}개 모드가 제거되었습니다"
            )

    def _log_packaging_summary(self, results: Dict[str, PackagingResult]) -> None:
        """패키징 결과 요약을 로그에 출력합니다."""
        logger.info("=== 패키징 결과 ===")

        total_files = 0
        for package_type, result in results.items():
            if result.success:
                total_files += result.file_count
                logger.info(
                    f"✅ {package_type}: {result.file_count}개 파일 → {result.output_path}"
                )
            else:
                logger.error(f"❌ {package_type}: 실패 ({', '.join(result.errors)})")

        logger.info(f"총 {len(results)}개 아카이브 생성, {total_files}개 파일 처리")
