"""
패키징 기본 클래스들
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from ..modpack.models import Modpack
from ..utils.fs import published_mode

logger = logging.getLogger(__name__)


@dataclass
class PackagingResult:
    """패키징 결과를 담는 데이터 클래스"""

    success: bool
    output_path: Optional[Path] = None
    file_count: int = 0
    errors: List[str] = None

    def __post_init__(self):
        if self.errors is None:
            self.errors = []


class BasePackager(ABC):
    """모드팩 배포본을 만드는 패키징 작업의 기본 클래스"""

    @abstractmethod
    async def package(
        self, modpack: Modpack, modpack_path: Path, output_dir: Path, **kwargs
    ) -> Dict[str, PackagingResult]:
        """
        모드팩을 배포용 파일로 패키징합니다.

        Args:
            modpack: 패키징할 모드팩 설정
            modpack_path: 모드팩 폴더 (modpack.yaml, mods/, config/)
            output_dir: 출력 디렉토리
            **kwargs: 추가 옵션들

        Returns:
            Dict[패키지 종류, 결과]: 패키징 결과들
        """
        pass

    def _ensure_directory(self, path: Path) -> None:
        """디렉토리가 존재하지 않으면 생성합니다."""
        path.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _atomic_output(self, final_path: Path) -> Iterator[Path]:
        """
        같은 디렉토리의 임시 파일에 쓰고, 블록이 정상 종료되면 최종 경로로 교체합니다.

        블록에서 예외가 발생하면 임시 파일을 지우고 예외를 그대로 전파합니다.
        최종 경로에는 완성된 파일만 나타납니다.
        """
        self._ensure_directory(final_path.parent)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{final_path.name}.", suffix=".tmp", dir=final_path.parent
        )
        os.close(fd)
        tmp_path = Path(tmp_name)

        try:
            yield tmp_path
            os.chmod(tmp_path, published_mode())
            os.replace(tmp_path, final_path)
        except BaseException:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.warning(f"임시 파일 정리 실패 ({tmp_path}): {cleanup_error}")
            raise

    def _get_relative_path(self, file_path: Path, base_path: Path) -> Optional[str]:
        """
        파일이 기준 경로 안에 있으면 POSIX 형식의 상대 경로를 반환합니다.

        Args:
            file_path: 전체 파일 경로
            base_path: 기준 경로

        Returns:
            상대 경로 또는 None (기준 경로 밖인 경우)
        """
        # 심볼릭 링크는 따라가지 않고 경로 문자열만 정규화
        full = Path(os.path.normpath(os.path.abspath(file_path)))
        base = Path(os.path.normpath(os.path.abspath(base_path)))
        try:
            return full.relative_to(base).as_posix()
        except ValueError:
            return None
