"""
ArchiveBundler 및 PackageManager 테스트
"""

import asyncio
import stat
import tarfile

import pytest
import yaml

from modpacker.errors import ArchiveError, ValidationError
from modpacker.modpack.models import Mod, Modpack
from modpacker.modpack_packaging.archive import (
    ArchiveBundler,
    full_archive_name,
    server_archive_name,
)
from modpacker.modpack_packaging.manager import PackageManager
from modpacker.utils.fs import published_mode

MANIFEST = """\
version: 1.0.0
name: testpack
minecraft:
  version: 1.12.2
mods:
  - filename: client.jar
    client: true
  - filename: common.jar
"""


def archive_names(path):
    with tarfile.open(path, "r:gz") as tar:
        return sorted(info.name for info in tar.getmembers() if info.isfile())


def test_archive_names():
    modpack = Modpack(name="testpack", version="1.0.0")

    assert server_archive_name(modpack) == "testpack-v1.0.0-server.tar.gz"
    assert full_archive_name(modpack) == "testpack-v1.0.0.tar.gz"


def test_server_archive_excludes_client_mods(make_modpack, tmp_path):
    modpack_dir = make_modpack(MANIFEST, mod_files=["client.jar", "common.jar"])
    output_dir = tmp_path / "out"

    generation = asyncio.run(PackageManager().build(modpack_dir, output_dir))

    assert generation.changes.is_empty
    assert archive_names(output_dir / "testpack-v1.0.0-server.tar.gz") == [
        "config/forge.cfg",
        "modpack.yaml",
        "mods/common.jar",
    ]
    assert archive_names(output_dir / "testpack-v1.0.0.tar.gz") == [
        "config/forge.cfg",
        "modpack.yaml",
        "mods/client.jar",
        "mods/common.jar",
    ]


def test_build_records_new_and_removed_mods(make_modpack, tmp_path):
    modpack_dir = make_modpack(MANIFEST, mod_files=["common.jar", "extra.jar"])
    output_dir = tmp_path / "out"

    manager = PackageManager()
    generation = asyncio.run(manager.build(modpack_dir, output_dir))

    assert generation.changes.new_mods == ["extra.jar"]
    assert generation.changes.removed_mods == ["client.jar"]
    assert manager.last_results["full"].file_count == 4

    saved = yaml.safe_load((modpack_dir / "modpack.yaml").read_text(encoding="utf-8"))
    assert saved["mods"] == [
        {"filename": "common.jar", "client": False},
        {"filename": "extra.jar", "client": False},
    ]

    # 아카이브 안의 매니페스트도 갱신된 목록을 가짐
    with tarfile.open(output_dir / "testpack-v1.0.0.tar.gz", "r:gz") as tar:
        packed = yaml.safe_load(tar.extractfile("modpack.yaml").read())
    assert [m["filename"] for m in packed["mods"]] == ["common.jar", "extra.jar"]


def test_no_temporary_files_left(make_modpack, tmp_path):
    modpack_dir = make_modpack(MANIFEST, mod_files=["client.jar", "common.jar"])
    output_dir = tmp_path / "out"

    asyncio.run(PackageManager().build(modpack_dir, output_dir))

    assert sorted(p.name for p in output_dir.iterdir()) == [
        "testpack-v1.0.0-server.tar.gz",
        "testpack-v1.0.0.tar.gz",
    ]


def test_missing_config_dir_is_skipped(make_modpack, tmp_path):
    modpack_dir = make_modpack(MANIFEST, mod_files=["client.jar", "common.jar"], config_files={})
    output_dir = tmp_path / "out"

    asyncio.run(PackageManager().build(modpack_dir, output_dir))

    assert archive_names(output_dir / "testpack-v1.0.0-server.tar.gz") == [
        "modpack.yaml",
        "mods/common.jar",
    ]


def test_empty_mods_list_is_rejected(make_modpack, tmp_path):
    modpack_dir = make_modpack("name: empty\nversion: 1.0.0\n")
    modpack = Modpack(name="empty", version="1.0.0")

    with pytest.raises(ValidationError):
        asyncio.run(ArchiveBundler().package(modpack, modpack_dir, tmp_path / "out"))


def test_build_with_no_mods_on_disk_is_rejected(make_modpack, tmp_path):
    modpack_dir = make_modpack(MANIFEST)

    with pytest.raises(ValidationError):
        asyncio.run(PackageManager().build(modpack_dir, tmp_path / "out"))


def test_missing_manifest_is_rejected(tmp_path):
    (tmp_path / "mods").mkdir()
    (tmp_path / "mods" / "a.jar").write_bytes(b"jar")
    modpack = Modpack(name="x", version="1", mods=[Mod(filename="a.jar")])

    with pytest.raises(ValidationError):
        asyncio.run(ArchiveBundler().package(modpack, tmp_path, tmp_path / "out"))


def test_listed_mod_missing_on_disk_fails(make_modpack, tmp_path):
    modpack_dir = make_modpack(MANIFEST, mod_files=["common.jar"])
    modpack = Modpack(
        name="testpack",
        version="1.0.0",
        mods=[Mod(filename="common.jar"), Mod(filename="gone.jar")],
    )
    output_dir = tmp_path / "out"
    output_dir.mkdir()

    with pytest.raises(ArchiveError):
        asyncio.run(ArchiveBundler().package(modpack, modpack_dir, output_dir))

    assert list(output_dir.iterdir()) == []


def test_mod_outside_mods_dir_fails(make_modpack, tmp_path):
    modpack_dir = make_modpack(MANIFEST, mod_files=["common.jar"])
    modpack = Modpack(
        name="testpack", version="1.0.0", mods=[Mod(filename="../modpack.yaml")]
    )

    with pytest.raises(ArchiveError):
        asyncio.run(ArchiveBundler().package(modpack, modpack_dir, tmp_path / "out"))


def test_server_archive_kept_when_full_archive_fails(make_modpack, tmp_path):
    # 디스크에 없는 모드가 client 전용이라 서버 아카이브는 성공하고 전체 아카이브만 실패
    modpack_dir = make_modpack(MANIFEST, mod_files=["common.jar"])
    modpack = Modpack(
        name="testpack",
        version="1.0.0",
        mods=[Mod(filename="common.jar"), Mod(filename="client.jar", client=True)],
    )
    output_dir = tmp_path / "out"

    with pytest.raises(ArchiveError):
        asyncio.run(ArchiveBundler().package(modpack, modpack_dir, output_dir))

    assert [p.name for p in output_dir.iterdir()] == ["testpack-v1.0.0-server.tar.gz"]
    assert archive_names(output_dir / "testpack-v1.0.0-server.tar.gz") == [
        "config/forge.cfg",
        "modpack.yaml",
        "mods/common.jar",
    ]


@pytest.mark.parametrize("name", ["../escape", "a/b", "a\\b"])
def test_names_with_path_separators_are_rejected(make_modpack, tmp_path, name):
    modpack_dir = make_modpack(MANIFEST, mod_files=["common.jar"])
    modpack = Modpack(name=name, version="1.0.0", mods=[Mod(filename="common.jar")])
    output_dir = tmp_path / "out"

    with pytest.raises(ValidationError):
        asyncio.run(ArchiveBundler().package(modpack, modpack_dir, output_dir))

    assert not output_dir.exists()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["pack"]


def test_archives_get_regular_file_mode(make_modpack, tmp_path):
    modpack_dir = make_modpack(MANIFEST, mod_files=["client.jar", "common.jar"])
    output_dir = tmp_path / "out"

    asyncio.run(PackageManager().build(modpack_dir, output_dir))

    expected = published_mode()
    for archive in output_dir.iterdir():
        assert stat.S_IMODE(archive.stat().st_mode) == expected
