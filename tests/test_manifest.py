"""
modpack.yaml 읽기/쓰기 테스트
"""

import asyncio

import pytest
import yaml

from modpacker.errors import ConfigError, ModpackIOError
from modpacker.install.forge import forge_version_id
from modpacker.modpack.manifest import (
    dump_modpack_yaml,
    load_modpack_config,
    parse_modpack_yaml,
    save_modpack_config,
)

FULL_MANIFEST = """\
version: 1.2.0
name: Test Pack
author: tester
homepage: https://example.com
minecraft:
  version: 1.12.2
  javaArgs: -Xmx4G
  launcher: legacy
forge:
  version: 14.23.5.2847
mods:
  - filename: a.jar
    client: true
    sha1: deadbeef
  - filename: b.jar
"""


def test_round_trip_preserves_recognized_fields(tmp_path):
    src = tmp_path / "modpack.yaml"
    src.write_text(FULL_MANIFEST, encoding="utf-8")

    modpack = asyncio.run(load_modpack_config(src))

    out = tmp_path / "saved.yaml"
    asyncio.run(save_modpack_config(out, modpack))
    reloaded = asyncio.run(load_modpack_config(out))

    assert reloaded == modpack
    assert reloaded.version == "1.2.0"
    assert reloaded.name == "Test Pack"
    assert reloaded.author == "tester"
    assert reloaded.minecraft.version == "1.12.2"
    assert reloaded.minecraft.java_args == "-Xmx4G"
    assert reloaded.forge.version == "14.23.5.2847"
    assert [(m.filename, m.client) for m in reloaded.mods] == [
        ("a.jar", True),
        ("b.jar", False),
    ]

    # 스키마에 없는 키는 저장된 파일에 남지 않음
    saved = yaml.safe_load(out.read_text(encoding="utf-8"))
    assert "homepage" not in saved
    assert "launcher" not in saved["minecraft"]
    assert "sha1" not in saved["mods"][0]
    assert saved["minecraft"]["javaArgs"] == "-Xmx4G"


def test_save_is_deterministic(tmp_path):
    modpack = parse_modpack_yaml(FULL_MANIFEST)
    first = dump_modpack_yaml(modpack)
    second = dump_modpack_yaml(parse_modpack_yaml(first))

    assert first == second
    assert list(yaml.safe_load(first)) == [
        "version",
        "name",
        "author",
        "minecraft",
        "forge",
        "mods",
    ]


def test_numeric_versions_are_kept_as_strings():
    modpack = parse_modpack_yaml("version: 1.0\nname: x\nminecraft:\n  version: 1.16\n")

    assert modpack.version == "1.0"
    assert modpack.minecraft.version == "1.16"

    reloaded = parse_modpack_yaml(dump_modpack_yaml(modpack))
    assert reloaded.version == "1.0"


def test_trailing_zero_versions_survive_round_trip(tmp_path):
    src = tmp_path / "modpack.yaml"
    src.write_text(
        "version: 1.10\nname: x\nminecraft:\n  version: 1.20\nforge:\n  version: 46.0.14\n"
        "mods:\n  - filename: 2.jar\n    client: true\n",
        encoding="utf-8",
    )

    modpack = asyncio.run(load_modpack_config(src))

    assert modpack.version == "1.10"
    assert modpack.minecraft.version == "1.20"
    assert modpack.mods[0].filename == "2.jar"
    assert modpack.mods[0].client is True
    assert forge_version_id(modpack) == "1.20-forge1.20-46.0.14"

    asyncio.run(save_modpack_config(src, modpack))
    reloaded = asyncio.run(load_modpack_config(src))
    assert reloaded.version == "1.10"
    assert reloaded.minecraft.version == "1.20"


def test_missing_sections_use_defaults():
    modpack = parse_modpack_yaml("name: bare\n")

    assert modpack.minecraft.version == ""
    assert modpack.forge.version == ""
    assert modpack.mods == []


def test_empty_file_loads_default_modpack():
    modpack = parse_modpack_yaml("")

    assert modpack.name == ""
    assert modpack.mods == []


def test_forge_without_minecraft_version_fails():
    with pytest.raises(ConfigError):
        parse_modpack_yaml("name: x\nforge:\n  version: 14.23.5.2847\n")


def test_forge_with_minecraft_version_loads():
    modpack = parse_modpack_yaml(
        "name: x\nminecraft:\n  version: 1.12.2\nforge:\n  version: 14.23.5.2847\n"
    )
    assert modpack.forge.version == "14.23.5.2847"


def test_duplicate_mod_filenames_fail():
    with pytest.raises(ConfigError):
        parse_modpack_yaml("mods:\n  - filename: a.jar\n  - filename: a.jar\n")


def test_invalid_yaml_fails():
    with pytest.raises(ConfigError):
        parse_modpack_yaml("name: [unclosed\n")


def test_non_mapping_top_level_fails():
    with pytest.raises(ConfigError):
        parse_modpack_yaml("- just\n- a list\n")


def test_wrong_field_type_fails():
    with pytest.raises(ConfigError):
        parse_modpack_yaml("mods: not-a-list\n")


def test_missing_file_raises_io_error(tmp_path):
    with pytest.raises(ModpackIOError):
        asyncio.run(load_modpack_config(tmp_path / "missing.yaml"))
