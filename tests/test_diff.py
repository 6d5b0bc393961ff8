"""
모드 폴더 비교(build_modpack) 및 ModpackLoader 테스트
"""

import asyncio

import pytest

from modpacker.errors import ModpackIOError
from modpacker.modpack.diff import build_modpack
from modpacker.modpack.load import ModpackLoader
from modpacker.modpack.models import Mod, Modpack


def modpack_with(*mods):
    return Modpack(name="test", version="1.0.0", mods=list(mods))


def test_added_and_removed_mods():
    modpack = modpack_with(Mod(filename="a"), Mod(filename="b", client=True))

    generation = build_modpack(modpack, ["b", "c"])

    assert generation.changes.removed_mods == ["a"]
    assert generation.changes.new_mods == ["c"]
    assert [(m.filename, m.client) for m in generation.modpack.mods] == [
        ("b", True),
        ("c", False),
    ]


def test_input_modpack_is_not_mutated():
    modpack = modpack_with(Mod(filename="a"), Mod(filename="b"))

    build_modpack(modpack, ["b", "c"])

    assert modpack.mod_filenames() == ["a", "b"]


def test_diff_is_idempotent():
    modpack = modpack_with(Mod(filename="a"), Mod(filename="b"))
    on_disk = ["b", "c", "d"]

    first = build_modpack(modpack, on_disk)
    second = build_modpack(first.modpack, on_disk)

    assert second.changes.new_mods == []
    assert second.changes.removed_mods == []
    assert second.modpack == first.modpack


def test_last_recorded_mod_can_be_removed():
    modpack = modpack_with(Mod(filename="a"), Mod(filename="b"), Mod(filename="c"))

    generation = build_modpack(modpack, ["a"])

    assert generation.changes.removed_mods == ["b", "c"]
    assert generation.modpack.mod_filenames() == ["a"]


def test_new_mods_keep_enumeration_order():
    generation = build_modpack(modpack_with(), ["z.jar", "a.jar", "m.jar"])

    assert generation.changes.new_mods == ["z.jar", "a.jar", "m.jar"]
    assert generation.modpack.mod_filenames() == ["z.jar", "a.jar", "m.jar"]


def test_duplicate_disk_names_collapse():
    generation = build_modpack(modpack_with(), ["a.jar", "a.jar"])

    assert generation.changes.new_mods == ["a.jar"]
    assert generation.modpack.mod_filenames() == ["a.jar"]


def test_new_and_removed_are_disjoint():
    modpack = modpack_with(Mod(filename="a"), Mod(filename="x"))
    generation = build_modpack(modpack, ["x", "y"])

    assert not set(generation.changes.new_mods) & set(generation.changes.removed_mods)


def test_loader_ignores_directories(make_modpack):
    modpack_dir = make_modpack(
        "name: test\nversion: 1.0.0\nmods:\n  - filename: old.jar\n",
        mod_files=["b.jar", "a.jar"],
    )
    (modpack_dir / "mods" / "extracted").mkdir()

    loader = ModpackLoader(str(modpack_dir))
    assert loader.list_mod_files() == ["a.jar", "b.jar"]

    generation = asyncio.run(loader.build())
    assert generation.changes.new_mods == ["a.jar", "b.jar"]
    assert generation.changes.removed_mods == ["old.jar"]

    stats = loader.get_build_stats(generation)
    assert stats["total_mods"] == 2
    assert stats["new_mods"] == 2
    assert stats["removed_mods"] == 1


def test_loader_without_mods_dir_fails(tmp_path):
    (tmp_path / "modpack.yaml").write_text("name: test\n", encoding="utf-8")

    with pytest.raises(ModpackIOError):
        ModpackLoader(str(tmp_path)).list_mod_files()
