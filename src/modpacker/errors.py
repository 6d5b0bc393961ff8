"""
모드팩 도구 전체에서 사용하는 예외 계층
"""

from __future__ import annotations


class ModpackerError(Exception):
    """모든 modpacker 예외의 기본 클래스"""


class ConfigError(ModpackerError):
    """modpack.yaml 또는 레지스트리 파일의 내용이 잘못된 경우"""


class ValidationError(ModpackerError):
    """작업의 사전 조건이 충족되지 않은 경우 (빈 모드 목록, 매니페스트 없음 등)"""


class ModpackIOError(ModpackerError, OSError):
    """파일 읽기/쓰기/복사 실패"""


class NetworkError(ModpackerError):
    """다운로드 실패"""


class ArchiveError(ModpackerError):
    """아카이브 생성 또는 추출 실패"""


class DependencyInstallError(ModpackerError):
    """Forge 설치 프로그램 실행 실패"""


__all__ = [
    "ModpackerError",
    "ConfigError",
    "ValidationError",
    "ModpackIOError",
    "NetworkError",
    "ArchiveError",
    "DependencyInstallError",
]
