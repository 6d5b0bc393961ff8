"""
설치된 모드팩 레지스트리 저장소

레지스트리는 한 번의 실행에서 한 번 읽고, 메모리에서 수정한 뒤,
작업이 모두 성공했을 때만 통째로 다시 씁니다.
파일 잠금은 없으므로 동시에 실행된 프로세스끼리는 마지막에 쓴 쪽이 이깁니다.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigError, ModpackIOError
from ..modpack.models import Modpack

logger = logging.getLogger(__name__)

REGISTRY_VERSION = "1"
REGISTRY_FILENAME = "modpacker.json"


class Registry(BaseModel):
    """설치된 모드팩, 설치된 Forge 버전, 인증 정보(불투명 데이터)"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    version: str = REGISTRY_VERSION
    forge_versions: Set[str] = Field(default_factory=set, alias="forgeVersions")
    # 해석하지 않고 그대로 저장/반환
    auth: Any = None
    installed_modpacks: Dict[str, Modpack] = Field(
        default_factory=dict, alias="installedModpacks"
    )

    @field_serializer("forge_versions")
    def _serialize_forge_versions(self, value: Set[str]) -> list:
        return sorted(value)


class RegistryStore(ABC):
    """레지스트리 영속화 포트"""

    @abstractmethod
    def load(self) -> Registry:
        """저장된 레지스트리를 읽습니다. 없으면 빈 레지스트리를 반환합니다."""

    @abstractmethod
    def save(self, registry: Registry) -> None:
        """레지스트리 전체를 저장합니다."""


class JsonRegistryStore(RegistryStore):
    """JSON 파일 기반 레지스트리 저장소"""

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: 레지스트리 파일 경로 (보통 마인크래프트 폴더의 modpacker.json)
        """
        self.path = Path(path)

    @classmethod
    def for_home(cls, minecraft_home: Union[str, Path]) -> "JsonRegistryStore":
        return cls(Path(minecraft_home) / REGISTRY_FILENAME)

    def load(self) -> Registry:
        if not self.path.exists():
            logger.debug(f"레지스트리 파일이 없어 새로 시작합니다: {self.path}")
            return Registry()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"레지스트리 파일이 손상되었습니다 ({self.path}): {e}") from e
        except OSError as e:
            raise ModpackIOError(f"레지스트리 파일 읽기 실패 ({self.path}): {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"레지스트리 파일 형식이 잘못되었습니다: {self.path}")

        try:
            return Registry.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigError(f"레지스트리 파일 형식이 잘못되었습니다 ({self.path}): {e}") from e

    def save(self, registry: Registry) -> None:
        data = registry.model_dump(mode="json", by_alias=True)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass  # 이미 교체되었거나 생성되지 않음
                raise
        except OSError as e:
            raise ModpackIOError(f"레지스트리 파일 저장 실패 ({self.path}): {e}") from e

        logger.debug(f"레지스트리 저장: {self.path}")


class InMemoryRegistryStore(RegistryStore):
    """테스트용 메모리 저장소"""

    def __init__(self, registry: Optional[Registry] = None):
        self._registry = registry.model_copy(deep=True) if registry else Registry()
        self.save_count = 0

    def load(self) -> Registry:
        return self._registry.model_copy(deep=True)

    def save(self, registry: Registry) -> None:
        self._registry = registry.model_copy(deep=True)
        self.save_count += 1


def save_auth(store: RegistryStore, auth: Any) -> None:
    """인증 정보를 그대로 레지스트리에 저장합니다."""
    registry = store.load()
    registry.auth = auth
    store.save(registry)


def load_auth(store: RegistryStore) -> Any:
    return store.load().auth
