"""
모드팩 아카이브 패키징 모듈

modpack.yaml, config 폴더, mods 폴더를 tar.gz 배포본으로 묶습니다.
- 전체 배포본: 모든 모드 포함
- 서버 배포본: client 전용 모드 제외
"""

import logging
import tarfile
from pathlib import Path
from typing import Dict, List

from ..errors import ArchiveError, ValidationError
from ..modpack.manifest import MANIFEST_FILENAME, save_modpack_config
from ..modpack.models import Mod, Modpack
from .base import BasePackager, PackagingResult

logger = logging.getLogger(__name__)


def archive_basename(modpack: Modpack) -> str:
    """
    아카이브 파일명의 공통 부분 ({name}-v{version})

    Raises:
        ValidationError: 이름이나 버전에 경로 구분자가 있는 경우
    """
    basename = f"{modpack.name}-v{modpack.version}"
    if "/" in basename or "\\" in basename:
        raise ValidationError(
            f"모드팩 이름과 버전에는 경로 구분자를 쓸 수 없습니다: {basename!r}"
        )
    return basename


def server_archive_name(modpack: Modpack) -> str:
    return f"{archive_basename(modpack)}-server.tar.gz"


def full_archive_name(modpack: Modpack) -> str:
    return f"{archive_basename(modpack)}.tar.gz"


class ArchiveBundler(BasePackager):
    """모드팩 폴더를 전체/서버용 tar.gz 아카이브로 패키징하는 클래스"""

    MODS_DIR = "mods"
    CONFIG_DIR = "config"

    async def package(
        self, modpack: Modpack, modpack_path: Path, output_dir: Path, **kwargs
    ) -> Dict[str, PackagingResult]:
        """
        매니페스트를 저장한 뒤 서버용, 전체 아카이브를 순서대로 생성합니다.

        각 아카이브는 임시 파일에 먼저 쓰고 완료된 후에만 최종 이름으로 바뀝니다.
        두 번째 아카이브가 실패해도 먼저 완료된 아카이브는 남습니다.

        Args:
            modpack: 모드팩 설정 (빌드로 갱신된 것일 수 있음)
            modpack_path: 모드팩 폴더
            output_dir: 아카이브를 저장할 디렉토리

        Returns:
            Dict[str, PackagingResult]: {"server": ..., "full": ...}

        Raises:
            ValidationError: 모드 목록이 비어 있거나 modpack.yaml이 없거나
                이름에 경로 구분자가 있는 경우
            ArchiveError: 아카이브 생성 실패
        """
        modpack_path = Path(modpack_path)
        output_dir = Path(output_dir)

        self._validate(modpack, modpack_path)

        # 변경된 모드 목록을 매니페스트에 반영
        await save_modpack_config(modpack_path / MANIFEST_FILENAME, modpack)

        server_mods = [mod for mod in modpack.mods if not mod.client]
        logger.info(
            f"아카이브 생성 시작: 전체 {len(modpack.mods)}개 모드, 서버 {len(server_mods)}개 모드"
        )

        results: Dict[str, PackagingResult] = {}
        results["server"] = self._write_archive(
            modpack_path, output_dir / server_archive_name(modpack), server_mods
        )
        results["full"] = self._write_archive(
            modpack_path, output_dir / full_archive_name(modpack), modpack.mods
        )
        return results

    def _validate(self, modpack: Modpack, modpack_path: Path) -> None:
        if not modpack.mods:
            raise ValidationError("Invalid mods list, expected non-empty list")

        if not (modpack_path / MANIFEST_FILENAME).is_file():
            raise ValidationError(
                f"{MANIFEST_FILENAME} not found in modpack path: {modpack_path}"
            )

        archive_basename(modpack)

    def _collect_members(self, modpack_path: Path, mods: List[Mod]) -> List[str]:
        """아카이브에 넣을 항목들 (모드팩 폴더 기준 상대 경로)"""
        members = [MANIFEST_FILENAME]

        if (modpack_path / self.CONFIG_DIR).is_dir():
            members.append(self.CONFIG_DIR)
        else:
            logger.warning(f"config 폴더가 없어 아카이브에서 제외합니다: {modpack_path}")

        mods_root = modpack_path / self.MODS_DIR
        for mod in mods:
            mod_path = mods_root / mod.filename
            relative = self._get_relative_path(mod_path, mods_root)
            if relative is None:
                raise ArchiveError(f"mods 폴더 밖을 가리키는 모드 파일명: {mod.filename}")
            if not mod_path.is_file():
                raise ArchiveError(f"모드 파일이 존재하지 않음: {mod_path}")
            members.append(f"{self.MODS_DIR}/{relative}")

        return members

    def _write_archive(
        self, modpack_path: Path, archive_path: Path, mods: List[Mod]
    ) -> PackagingResult:
        members = self._collect_members(modpack_path, mods)

        try:
            with self._atomic_output(archive_path) as tmp_path:
                with tarfile.open(tmp_path, "w:gz") as tar:
                    for arcname in members:
                        tar.add(modpack_path / arcname, arcname=arcname)
                    file_count = sum(1 for info in tar.getmembers() if info.isfile())
        except (OSError, tarfile.TarError) as e:
            raise ArchiveError(f"아카이브 생성 실패 ({archive_path}): {e}") from e

        logger.info(f"아카이브 생성: {archive_path} ({file_count}개 파일)")
        return PackagingResult(
            success=True, output_path=archive_path, file_count=file_count
        )
