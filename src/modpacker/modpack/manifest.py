"""
modpack.yaml 읽기/쓰기 모듈

매니페스트를 고정된 스키마(:class:`~modpacker.modpack.models.Modpack`)로 투영합니다.
스키마에 없는 키는 버려지며, 저장 시에는 항상 같은 순서와 형식으로 직렬화됩니다.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import aiofiles
import yaml
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigError, ModpackIOError
from .models import Modpack

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "modpack.yaml"

_NUMERIC_TAGS = ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")


class _ManifestLoader(yaml.SafeLoader):
    """숫자처럼 보이는 스칼라(1.20, 1.10 등)를 문자열 그대로 읽는 로더"""


_ManifestLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_modpack_yaml(content: str, source: str = "<string>") -> Modpack:
    """
    YAML 문자열을 Modpack으로 변환합니다.

    Args:
        content: modpack.yaml 내용
        source: 오류 메시지에 표시할 출처

    Returns:
        Modpack: 스키마에 맞게 투영된 모드팩

    Raises:
        ConfigError: YAML 문법 오류, 잘못된 필드 타입, 중복된 모드 파일명,
            minecraft.version 없이 forge.version이 설정된 경우
    """
    try:
        data = yaml.load(content, Loader=_ManifestLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"{source}: YAML 파싱 실패: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"{source}: 최상위 요소는 매핑이어야 합니다 (현재: {type(data).__name__})"
        )

    try:
        modpack = Modpack.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"{source}: 잘못된 모드팩 설정: {e}") from e

    _check_modpack(modpack, source)
    return modpack


def _check_modpack(modpack: Modpack, source: str) -> None:
    if modpack.forge.version and not modpack.minecraft.version:
        raise ConfigError(
            "forge.version can only be set when minecraft.version is also set"
            f" ({source})"
        )

    seen = set()
    for mod in modpack.mods:
        if not mod.filename:
            raise ConfigError(f"{source}: 파일명이 비어 있는 모드 항목이 있습니다")
        if mod.filename in seen:
            raise ConfigError(f"{source}: 중복된 모드 파일명: {mod.filename}")
        seen.add(mod.filename)


def dump_modpack_yaml(modpack: Modpack) -> str:
    """Modpack을 결정적인 YAML 문자열로 직렬화합니다."""
    return yaml.safe_dump(
        modpack.to_manifest(),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


async def load_modpack_config(path: Union[str, Path]) -> Modpack:
    """
    modpack.yaml을 읽어 Modpack으로 반환합니다.

    Args:
        path: 매니페스트 파일 경로

    Returns:
        Modpack: 모드팩 설정

    Raises:
        ModpackIOError: 파일을 읽을 수 없는 경우
        ConfigError: 내용이 잘못된 경우
    """
    path = Path(path)
    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            content = await f.read()
    except OSError as e:
        raise ModpackIOError(f"매니페스트를 읽을 수 없습니다 ({path}): {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"매니페스트 인코딩 오류 ({path}): {e}") from e

    modpack = parse_modpack_yaml(content, source=str(path))
    logger.debug(f"매니페스트 로드: {path} ({len(modpack.mods)}개 모드)")
    return modpack


async def save_modpack_config(path: Union[str, Path], modpack: Modpack) -> None:
    """Modpack을 modpack.yaml 형식으로 저장합니다."""
    path = Path(path)
    content = dump_modpack_yaml(modpack)
    try:
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(content)
    except OSError as e:
        raise ModpackIOError(f"매니페스트를 저장할 수 없습니다 ({path}): {e}") from e

    logger.debug(f"매니페스트 저장: {path}")
