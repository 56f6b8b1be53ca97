import argparse
import pathlib
from typing import TYPE_CHECKING

from ..config import DEFAULT_CONFIG_FILENAME
from .cmd import RootCommand

if TYPE_CHECKING:
    from ..config import GlobalConfig


class InitCommand(
    RootCommand,
    cmd="init",
    help="Create a default config file",
):
    @classmethod
    def configure_args(cls, gc: "GlobalConfig", p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--config",
            type=str,
            default=f"./{DEFAULT_CONFIG_FILENAME}",
            help="Path of the config file to create",
        )

    @classmethod
    def main(cls, cfg: "GlobalConfig", args: argparse.Namespace) -> int:
        return cli_init(cfg, args)


def cli_init(cfg: "GlobalConfig", args: argparse.Namespace) -> int:
    from rich.markup import escape

    from ..config import absolutize, dump_default_config

    logger = cfg.logger
    config_path = absolutize(pathlib.Path(args.config))
    if config_path.exists():
        logger.F(f"config file already exists at [bold]{escape(str(config_path))}[/]")
        return 1

    with open(config_path, "w", encoding="utf-8") as fp:
        fp.write(dump_default_config())

    logger.I(f"created config file at [bold]{escape(str(config_path))}[/]")
    return 0
