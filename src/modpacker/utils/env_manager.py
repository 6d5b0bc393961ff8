"""
환경 변수 관리 유틸리티 모듈

.env 파일 읽기 및 마인크래프트 폴더 위치 결정 기능 제공
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from ..errors import ConfigError

logger = logging.getLogger(__name__)

MINECRAFT_HOME_ENV = "MINECRAFT_HOME"


class EnvManager:
    """환경 변수 관리자 클래스"""

    def __init__(self, env_file_path: str = ".env"):
        self.env_file_path = Path(env_file_path)
        self.env_data: Dict[str, str] = {}
        self.load_env_file()

    def load_env_file(self):
        """환경 변수 파일 로드 (이미 설정된 환경 변수는 덮어쓰지 않음)"""
        if not self.env_file_path.exists():
            logger.debug(f"환경 변수 파일이 없습니다: {self.env_file_path}")
            return

        try:
            with open(self.env_file_path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        key = key.strip()
                        value = value.strip()

                        # 따옴표 제거
                        if value.startswith('"') and value.endswith('"'):
                            value = value[1:-1]
                        elif value.startswith("'") and value.endswith("'"):
                            value = value[1:-1]

                        self.env_data[key] = value
                        os.environ.setdefault(key, value)

            logger.debug(f"환경 변수 파일 로드 완료: {len(self.env_data)}개 변수")

        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"환경 변수 파일 로드 실패 ({self.env_file_path}): {e}") from e

    def get_env_var(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """환경 변수 값 조회"""
        # 먼저 현재 환경 변수에서 조회
        value = os.environ.get(key)
        if value is not None:
            return value

        return self.env_data.get(key, default)

    def minecraft_home_candidates(self) -> List[Path]:
        """마인크래프트 폴더 후보 (우선순위 순)"""
        homedir = Path.home()
        locations = [
            homedir / ".minecraft",
            homedir / "Library" / "Application Support" / "minecraft",
        ]

        home = self.get_env_var(MINECRAFT_HOME_ENV)
        if home:
            home_path = Path(home).expanduser()
            if not home_path.is_absolute():
                home_path = Path.cwd() / home_path
            locations.insert(0, home_path)

        return locations

    def find_minecraft_home(self) -> Path:
        """
        마인크래프트 폴더를 찾습니다.

        Returns:
            Path: 처음으로 발견된 마인크래프트 폴더

        Raises:
            ConfigError: 어떤 후보 폴더도 존재하지 않는 경우
        """
        for location in self.minecraft_home_candidates():
            if location.is_dir():
                logger.debug(f"마인크래프트 폴더: {location}")
                return location

        raise ConfigError(
            f"failed to find minecraft directory, set EnvVar {MINECRAFT_HOME_ENV}"
        )
