from __future__ import annotations

import logging
from typing import Iterable, List

from .models import Mod, ModpackChanges, ModpackGeneration, Modpack

logger = logging.getLogger(__name__)


def build_modpack(modpack: Modpack, mod_files: Iterable[str]) -> ModpackGeneration:
    """
    디스크의 모드 파일 목록과 매니페스트의 모드 목록을 비교합니다.

    입력 모드팩은 변경하지 않고, 갱신된 복사본과 변경 사항을 반환합니다.
    새 모드는 ``mod_files`` 순서대로 ``client=False``로 뒤에 추가되고,
    디스크에 없는 모드는 목록에서 제거됩니다.

    Args:
        modpack: 현재 매니페스트
        mod_files: mods/ 폴더의 파일명들 (디렉토리 제외)

    Returns:
        ModpackGeneration: 갱신된 모드팩과 추가/제거된 파일명
    """
    # dict를 순서 있는 집합으로 사용 (중복 파일명은 하나로 합쳐짐)
    found_mods = dict.fromkeys(mod_files)

    removed_mods: List[str] = []

    # 기록된 모드 중 디스크에 있는 것은 집합에서 제거하여 새 모드로 취급하지 않음
    for mod in modpack.mods:
        if mod.filename in found_mods:
            del found_mods[mod.filename]
            continue
        removed_mods.append(mod.filename)

    # 남은 파일은 이전에 기록되지 않은 새 모드
    new_mods = list(found_mods)

    removed = set(removed_mods)
    updated = modpack.model_copy(deep=True)
    updated.mods = [mod for mod in updated.mods if mod.filename not in removed]
    updated.mods.extend(Mod(filename=filename, client=False) for filename in new_mods)

    logger.debug(
        f"모드 비교 완료: 추가 {len(new_mods)}개, 제거 {len(removed_mods)}개"
    )

    return ModpackGeneration(
        modpack=updated,
        changes=ModpackChanges(new_mods=new_mods, removed_mods=removed_mods),
    )
