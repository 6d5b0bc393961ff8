import sys
from pathlib import Path

import pytest

# src 디렉토리를 sys.path에 추가 (설치하지 않고 테스트 실행 가능)
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


def create_test_modpack(
    modpack_dir: Path,
    manifest: str,
    mod_files=(),
    config_files=None,
) -> Path:
    """테스트용 모드팩 폴더 구조 생성"""
    modpack_dir.mkdir(parents=True, exist_ok=True)
    (modpack_dir / "modpack.yaml").write_text(manifest, encoding="utf-8")

    mods_dir = modpack_dir / "mods"
    mods_dir.mkdir(exist_ok=True)
    for filename in mod_files:
        (mods_dir / filename).write_bytes(b"fake jar content " + filename.encode())

    config_files = {"forge.cfg": "general {}\n"} if config_files is None else config_files
    for relative, content in config_files.items():
        path = modpack_dir / "config" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    return modpack_dir


@pytest.fixture
def make_modpack(tmp_path):
    def _make(manifest: str, mod_files=(), config_files=None, name: str = "pack"):
        return create_test_modpack(tmp_path / name, manifest, mod_files, config_files)

    return _make
