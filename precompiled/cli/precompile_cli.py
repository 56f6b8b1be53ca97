import argparse
import pathlib
from typing import TYPE_CHECKING

from ..config import DEFAULT_CONFIG_FILENAME, DEFAULT_OUTPUT_FILENAME
from ..utils.porcelain import PorcelainEntity, PorcelainEntityType
from .cmd import RootCommand

if TYPE_CHECKING:
    from ..codegen import PrecompileResult
    from ..config import GlobalConfig
    from ..scanner import MissingIncludeError


class PorcelainPrecompileResult(PorcelainEntity):
    count: int
    keys: list[str]
    out: str | None


class PrecompileCommand(
    RootCommand,
    cmd="precompile",
    help="Embed files referenced by resolve_text() / resolve_bytes() calls",
    description="Scan Python sources for resolve_text() and resolve_bytes() calls with literal paths, and generate a module embedding the referenced files as base64.",
):
    @classmethod
    def configure_args(cls, gc: "GlobalConfig", p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "directory",
            type=str,
            nargs="?",
            default="./",
            help="Directory with Python source files; separate several with ':'",
        )
        p.add_argument(
            "-o",
            "--out",
            type=str,
            default=f"./{DEFAULT_OUTPUT_FILENAME}",
            help="Output Python module with the precompiled assets",
        )
        p.add_argument(
            "--dry-run",
            action="store_true",
            help="Precompile without generating the output module",
        )
        p.add_argument(
            "--config",
            type=str,
            default=f"./{DEFAULT_CONFIG_FILENAME}",
            help="Path to the config file",
        )
        p.add_argument(
            "--compact-errors",
            action="store_true",
            help="Report missing includes as 'file:line: error: message' for editor integration",
        )

    @classmethod
    def main(cls, cfg: "GlobalConfig", args: argparse.Namespace) -> int:
        return cli_precompile(cfg, args)


class CleanCommand(
    RootCommand,
    cmd="clean",
    help="Remove the generated module",
):
    @classmethod
    def configure_args(cls, gc: "GlobalConfig", p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "-o",
            "--out",
            type=str,
            default=f"./{DEFAULT_OUTPUT_FILENAME}",
            help="Generated Python module to remove",
        )

    @classmethod
    def main(cls, cfg: "GlobalConfig", args: argparse.Namespace) -> int:
        return cli_clean(cfg, args)


def _report_missing_include(
    cfg: "GlobalConfig",
    e: "MissingIncludeError",
    compact: bool,
) -> None:
    from rich.markup import escape

    site = e.site
    if compact:
        cfg.logger.log_console.print(
            f"{site.source}:{site.line}: error: resolve_{site.kind.value}() call references non-existent file {site.target}",
            markup=False,
            highlight=False,
        )
        return

    cfg.logger.F(
        f"resolve_{site.kind.value}() call at line {site.line} in [yellow]{escape(str(site.source))}[/] references non-existent file [yellow]{escape(str(site.target))}[/]"
    )


def _report_result(cfg: "GlobalConfig", result: "PrecompileResult") -> None:
    from rich.markup import escape

    from ..codegen import format_elapsed

    if cfg.is_porcelain:
        obj: PorcelainPrecompileResult = {
            "ty": PorcelainEntityType.PrecompileResultV1,
            "count": len(result.keys),
            "keys": result.keys,
            "out": None if result.out is None else str(result.out),
        }
        cfg.logger.emit_porcelain(obj)
        return

    cfg.logger.I(
        f"precompiled {len(result.keys)} calls in [bold]{format_elapsed(result.elapsed)}[/]"
    )
    if result.out is not None:
        cfg.logger.I(
            f"assets written to [green]{escape(str(result.out))}[/]; import [yellow]resolve_text[/] and [yellow]resolve_bytes[/] from it"
        )


def cli_precompile(cfg: "GlobalConfig", args: argparse.Namespace) -> int:
    from rich.markup import escape

    from ..codegen import precompile
    from ..config import PrecompileConfig, absolutize
    from ..config.errors import (
        InvalidConfigKeyError,
        InvalidConfigValueTypeError,
        MalformedConfigFileError,
    )
    from ..scanner import MissingIncludeError, UndecodableSourceError

    logger = cfg.logger
    out_path = pathlib.Path(args.out)
    out_abs_path = absolutize(out_path)
    if out_path.is_dir():
        logger.F(f"{escape(str(out_abs_path))} already exists as a directory")
        return 1

    try:
        pc = PrecompileConfig.load(args.config, logger)
    except (
        InvalidConfigKeyError,
        InvalidConfigValueTypeError,
        MalformedConfigFileError,
    ) as e:
        logger.F(f"unable to load config: {escape(str(e))}")
        return 1

    dirs = pc.effective_dirs(args.directory)
    logger.D(f"scanning directories: {escape(str([str(d) for d in dirs]))}")
    if not dirs:
        logger.W("no existing directory to scan")

    try:
        result = precompile(
            dirs,
            out_abs_path,
            config=pc,
            dry_run=args.dry_run,
            logger=logger,
        )
    except MissingIncludeError as e:
        _report_missing_include(cfg, e, args.compact_errors)
        return 1
    except UndecodableSourceError as e:
        logger.F(
            f"unable to read source file [yellow]{escape(str(e.source))}[/]: {escape(e.reason)}"
        )
        return 1
    except OSError as e:
        logger.F(f"unable to generate {escape(str(out_abs_path))}: {escape(str(e))}")
        return 1

    _report_result(cfg, result)
    return 0


def cli_clean(cfg: "GlobalConfig", args: argparse.Namespace) -> int:
    from rich.markup import escape

    from ..config import absolutize

    logger = cfg.logger
    out_path = pathlib.Path(args.out)
    out_abs_path = absolutize(out_path)
    if out_path.is_dir():
        logger.F(f"{escape(str(out_abs_path))} already exists as a directory")
        return 1

    if not out_path.exists():
        logger.F(f"precompiled file {escape(str(out_abs_path))} does not exist")
        return 1

    out_path.unlink()
    logger.I(f"removed [green]{escape(str(out_abs_path))}[/]")
    return 0
