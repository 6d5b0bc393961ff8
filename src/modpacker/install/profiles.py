"""
마인크래프트 런처 프로필 등록
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from ..errors import ConfigError, ModpackIOError
from ..modpack.models import Modpack
from .forge import forge_version_id

logger = logging.getLogger(__name__)

PROFILES_FILENAME = "launcher_profiles.json"
NEVER_USED = "1970-01-01T00:00:00.000Z"


def launcher_version_id(modpack: Modpack) -> str:
    """Forge를 쓰는 모드팩은 Forge 버전 식별자, 아니면 마인크래프트 버전"""
    if modpack.forge.version:
        return forge_version_id(modpack)
    return modpack.minecraft.version


def build_profile(modpack: Modpack, game_dir: Path) -> dict:
    return {
        "created": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z"),
        "lastUsed": NEVER_USED,
        "name": modpack.name,
        "gameDir": str(game_dir),
        "javaArgs": modpack.minecraft.java_args,
        "lastVersionId": launcher_version_id(modpack),
        "icon": "Furnace",
        "type": "custom",
    }


def ensure_launcher_profile(minecraft_home: Path, modpack: Modpack, game_dir: Path) -> bool:
    """
    launcher_profiles.json에 모드팩 프로필이 없으면 추가합니다.

    파일이 없으면(런처가 설치되지 않은 환경) 아무것도 하지 않습니다.

    Args:
        minecraft_home: 마인크래프트 폴더
        modpack: 설치된 모드팩
        game_dir: 모드팩 설치 폴더

    Returns:
        bool: 프로필을 새로 추가했는지 여부
    """
    profiles_file = Path(minecraft_home) / PROFILES_FILENAME
    if not profiles_file.is_file():
        logger.info(f"런처 프로필 파일이 없어 프로필 등록을 건너뜁니다: {profiles_file}")
        return False

    try:
        with open(profiles_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"런처 프로필 파일이 손상되었습니다 ({profiles_file}): {e}") from e
    except OSError as e:
        raise ModpackIOError(f"런처 프로필 파일 읽기 실패 ({profiles_file}): {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"런처 프로필 파일 형식이 잘못되었습니다: {profiles_file}")

    profiles = data.setdefault("profiles", {})
    if not isinstance(profiles, dict):
        raise ConfigError(f"런처 프로필 파일의 profiles 항목이 잘못되었습니다: {profiles_file}")
    if modpack.name in profiles:
        return False

    logger.info("마인크래프트 런처에 모드팩 프로필을 생성합니다")
    profiles[modpack.name] = build_profile(modpack, game_dir)

    try:
        with open(profiles_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ModpackIOError(f"런처 프로필 파일 저장 실패 ({profiles_file}): {e}") from e

    return True
