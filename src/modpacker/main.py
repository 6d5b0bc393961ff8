"""
메인 애플리케이션 진입점

modpacker <command> [options ...]
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .errors import ModpackerError
from .install.installer import ModpackInstaller
from .localization.messages import get_message, set_language, tr
from .modpack_packaging.manager import PackageManager
from .registry.store import JsonRegistryStore
from .utils.env_manager import EnvManager

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def resolve_minecraft_home(args: argparse.Namespace) -> Path:
    if args.home:
        return Path(args.home).expanduser()
    return EnvManager().find_minecraft_home()


async def run_build(args: argparse.Namespace) -> int:
    modpack_path = Path(args.modpack_path or os.getcwd())
    output_path = Path(args.output or os.getcwd())

    logger.info(get_message("build.loading", path=modpack_path))
    manager = PackageManager()
    generation = await manager.build(modpack_path, output_path)

    changes = generation.changes
    logger.info(
        get_message(
            "build.changes",
            new=len(changes.new_mods),
            removed=len(changes.removed_mods),
        )
    )
    logger.info(
        get_message(
            "build.done",
            server=manager.last_results["server"].output_path,
            full=manager.last_results["full"].output_path,
        )
    )
    return 0


async def run_install(args: argparse.Namespace) -> int:
    minecraft_home = resolve_minecraft_home(args)

    logger.info(get_message("install.start", locator=args.locator))
    installer = ModpackInstaller(minecraft_home)
    modpack = await installer.install(args.locator)

    logger.info(get_message("install.done", name=modpack.name, version=modpack.version))
    return 0


async def run_list(args: argparse.Namespace) -> int:
    registry = JsonRegistryStore.for_home(resolve_minecraft_home(args)).load()

    if not registry.installed_modpacks:
        print(get_message("list.empty"))
        return 0

    for modpack in registry.installed_modpacks.values():
        print(get_message("list.entry", name=modpack.name, version=modpack.version))
    return 0


async def run_version(args: argparse.Namespace) -> int:
    print(get_message("version", version=__version__))
    return 0


COMMANDS = {
    "build": run_build,
    "install": run_install,
    "list": run_list,
    "version": run_version,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modpacker", description=get_message("cli.description")
    )
    parser.add_argument("--home", help=get_message("cli.help.home"))
    parser.add_argument(
        "--lang", choices=["en", "ko"], default=None, help=get_message("cli.help.lang")
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help=get_message("cli.help.verbose")
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help=get_message("cli.help.build"))
    build.add_argument(
        "-p", "--modpackPath", dest="modpack_path", help=get_message("cli.help.modpack_path")
    )
    build.add_argument("-o", "--output", help=get_message("cli.help.output"))

    install = subparsers.add_parser("install", help=get_message("cli.help.install"))
    install.add_argument("locator", help=get_message("cli.help.locator"))

    subparsers.add_parser("list", help=get_message("cli.help.list"))
    subparsers.add_parser("version", help=get_message("cli.help.version"))

    return parser


def _preparse_language(argv: Optional[List[str]]) -> None:
    """도움말 문자열을 만들기 전에 --lang만 먼저 읽어 언어를 설정합니다."""
    preparser = argparse.ArgumentParser(add_help=False)
    preparser.add_argument("--lang", choices=["en", "ko"], default=None)
    known, _ = preparser.parse_known_args(argv)
    if known.lang:
        set_language(known.lang)


def main(argv: Optional[List[str]] = None) -> int:
    _preparse_language(argv)
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        return asyncio.run(COMMANDS[args.command](args))
    except ModpackerError as e:
        logger.error(get_message("error.failed", command=args.command, error=e))
        return 1
    except KeyboardInterrupt:
        logger.warning(tr("error.interrupted", "interrupted"))
        return 130


if __name__ == "__main__":
    sys.exit(main())
