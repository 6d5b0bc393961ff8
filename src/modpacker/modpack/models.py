from __future__ import annotations

import logging
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

__all__ = [
    "Mod",
    "MinecraftInfo",
    "ForgeInfo",
    "Modpack",
    "ModpackChanges",
    "ModpackGeneration",
]


def _coerce_str(value: Any) -> Any:
    """숫자로 전달된 버전 값(예: JSON의 ``2``)을 문자열로 바꿉니다."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


class _ManifestModel(BaseModel):
    """매니페스트 스키마에 없는 키는 조용히 버립니다."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Mod(_ManifestModel):
    """mods/ 폴더 안의 애드온 파일 하나"""

    filename: str
    client: bool = False  # True면 서버 배포본에서 제외

    @field_validator("filename", mode="before")
    @classmethod
    def _filename_str(cls, v: Any) -> Any:
        # None은 그대로 두어 필수 필드 검증에서 걸리도록 함
        return v if v is None else _coerce_str(v)

    @field_validator("client", mode="before")
    @classmethod
    def _client_default(cls, v: Any) -> Any:
        return False if v is None else v


class MinecraftInfo(_ManifestModel):
    version: str = ""
    # 권장 java 인자
    java_args: str = Field(default="", alias="javaArgs")

    @field_validator("version", "java_args", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> Any:
        return _coerce_str(v)


class ForgeInfo(_ManifestModel):
    version: str = ""

    @field_validator("version", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> Any:
        return _coerce_str(v)


class Modpack(_ManifestModel):
    """modpack.yaml에 기록되는 모드팩 정보"""

    version: str = ""
    name: str = ""
    author: str = ""
    minecraft: MinecraftInfo = Field(default_factory=MinecraftInfo)
    forge: ForgeInfo = Field(default_factory=ForgeInfo)
    mods: List[Mod] = Field(default_factory=list)

    @field_validator("version", "name", "author", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> Any:
        return _coerce_str(v)

    @field_validator("minecraft", "forge", mode="before")
    @classmethod
    def _section_default(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("mods", mode="before")
    @classmethod
    def _mods_default(cls, v: Any) -> Any:
        return [] if v is None else v

    def mod_filenames(self) -> List[str]:
        return [mod.filename for mod in self.mods]

    def to_manifest(self) -> dict:
        """디스크에 쓰는 형태(camelCase 키)의 딕셔너리를 반환합니다."""
        return self.model_dump(by_alias=True)


class ModpackChanges(_ManifestModel):
    new_mods: List[str] = Field(default_factory=list, alias="newMods")
    removed_mods: List[str] = Field(default_factory=list, alias="removedMods")

    @property
    def is_empty(self) -> bool:
        return not self.new_mods and not self.removed_mods


class ModpackGeneration(_ManifestModel):
    """빌드 결과: 갱신된 모드팩과 변경 사항"""

    modpack: Modpack
    changes: ModpackChanges = Field(default_factory=ModpackChanges)
