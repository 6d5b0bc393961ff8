"""
CLI 출력을 위한 메시지 카탈로그입니다.

모든 사용자 대상 문자열은 런타임에 언어를 바꿀 수 있도록 안정적인 키로 여기에 정의됩니다.
형식화된 텍스트를 검색하려면 `get_message(key, **kwargs)`를 사용하세요.
"""

from __future__ import annotations

from typing import Any, Dict

# ---------------------------------------------------------------------------
# 1. 언어별 메시지 카탈로그
# ---------------------------------------------------------------------------

_CATALOGS: Dict[str, Dict[str, str]] = {
    "en": {
        "cli.description": "✨ run and create modded minecraft installations from the CLI",
        "cli.help.build": "Build a modpack",
        "cli.help.install": "Install a modpack",
        "cli.help.list": "List installed modpacks",
        "cli.help.version": "Print the version.",
        "cli.help.modpack_path": "Path to your modpack location (i.e ~/.minecraft)",
        "cli.help.output": "Directory to output the modpack tar.gz files into",
        "cli.help.locator": "Modpack archive path or URL",
        "cli.help.home": "Minecraft directory (defaults to MINECRAFT_HOME or ~/.minecraft)",
        "cli.help.lang": "Output language",
        "cli.help.verbose": "Enable debug logging",
        # build
        "build.loading": "loading modpack at '{path}'",
        "build.done": "modpack created: {server} / {full}",
        "build.changes": "{new} mods added, {removed} mods removed",
        # install
        "install.start": "installing modpack from {locator}",
        "install.done": "installed modpack {name} v{version}",
        # list
        "list.entry": "{name} v{version}",
        "list.empty": "No modpacks installed",
        # misc
        "version": "modpacker v{version}",
        "error.failed": "{command} failed: {error}",
    },
    "ko": {
        "cli.description": "✨ CLI에서 모드 마인크래프트 설치본을 만들고 설치합니다",
        "cli.help.build": "모드팩 빌드",
        "cli.help.install": "모드팩 설치",
        "cli.help.list": "설치된 모드팩 목록",
        "cli.help.version": "버전 출력",
        "cli.help.modpack_path": "모드팩 폴더 경로 (예: ~/.minecraft)",
        "cli.help.output": "모드팩 tar.gz 파일을 저장할 폴더",
        "cli.help.locator": "모드팩 아카이브 경로 또는 URL",
        "cli.help.home": "마인크래프트 폴더 (기본값: MINECRAFT_HOME 또는 ~/.minecraft)",
        "cli.help.lang": "출력 언어",
        "cli.help.verbose": "디버그 로그 출력",
        "build.loading": "모드팩 로딩: '{path}'",
        "build.done": "모드팩 생성 완료: {server} / {full}",
        "build.changes": "모드 {new}개 추가, {removed}개 제거",
        "install.start": "모드팩 설치 중: {locator}",
        "install.done": "모드팩 설치 완료: {name} v{version}",
        "list.entry": "{name} v{version}",
        "list.empty": "설치된 모드팩이 없습니다",
        "version": "modpacker v{version}",
        "error.failed": "{command} 실패: {error}",
    },
}

# 현재 선택된 언어 (기본값: 영어).
_LANG: str = "en"


# ---------------------------------------------------------------------------
# 2. API 헬퍼
# ---------------------------------------------------------------------------


def set_language(lang: str) -> None:  # noqa: D401
    """전역 출력 언어를 설정합니다 (예: "en", "ko")."""
    global _LANG
    if lang in _CATALOGS:
        _LANG = lang
    else:
        _LANG = "en"


def get_language() -> str:
    return _LANG


def get_message(key: str, **kwargs: Any) -> str:  # noqa: D401
    """지정된 키에 대한 지역화된 메시지를 반환합니다."""
    catalog = _CATALOGS.get(_LANG, _CATALOGS["en"])
    template = catalog.get(key) or _CATALOGS["en"].get(key, f"<{key}>")
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError):
        # 포맷팅 실패 시 템플릿을 그대로 반환
        return template


def tr(key: str, default: str, **kwargs: Any) -> str:
    """카탈로그에 키가 없으면 *default*를 사용하는 get_message"""
    catalog = _CATALOGS.get(_LANG, _CATALOGS["en"])
    template = catalog.get(key, default)
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError):
        return template
