"""
모드팩 매니페스트 모듈

- modpack.yaml 읽기/쓰기 (스키마에 없는 키는 제거)
- mods 폴더와 매니페스트의 모드 목록 비교
"""

from .diff import build_modpack
from .load import ModpackLoader
from .manifest import (
    MANIFEST_FILENAME,
    dump_modpack_yaml,
    load_modpack_config,
    parse_modpack_yaml,
    save_modpack_config,
)
from .models import (
    ForgeInfo,
    MinecraftInfo,
    Mod,
    Modpack,
    ModpackChanges,
    ModpackGeneration,
)

__all__ = [
    "MANIFEST_FILENAME",
    "ForgeInfo",
    "MinecraftInfo",
    "Mod",
    "Modpack",
    "ModpackChanges",
    "ModpackGeneration",
    "ModpackLoader",
    "build_modpack",
    "dump_modpack_yaml",
    "load_modpack_config",
    "parse_modpack_yaml",
    "save_modpack_config",
]
