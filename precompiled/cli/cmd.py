import argparse
from typing import Callable, TYPE_CHECKING

from . import PRECOMPILED_ENTRYPOINT_NAME

if TYPE_CHECKING:
    from ..config import GlobalConfig

    CLIEntrypoint = Callable[["GlobalConfig", argparse.Namespace], int]


class BaseCommand:
    """Command registry. Every subclass registers itself on definition, and
    direct subclasses of the root command become its subcommands."""

    commands: "list[type[BaseCommand]]" = []

    cmd: str | None
    help: str | None
    description: str | None

    def __init_subclass__(
        cls,
        cmd: str | None,
        help: str | None = None,
        description: str | None = None,
        **kwargs: object,
    ) -> None:
        cls.cmd = cmd
        cls.help = help
        # subcommands without a long description reuse the one-line help
        cls.description = description or help

        cls.commands.append(cls)

        super().__init_subclass__(**kwargs)

    @classmethod
    def configure_args(cls, gc: "GlobalConfig", p: argparse.ArgumentParser) -> None:
        """Configure arguments for this command."""
        pass

    @classmethod
    def main(cls, cfg: "GlobalConfig", args: argparse.Namespace) -> int:
        """Entrypoint of this command."""
        raise NotImplementedError

    @classmethod
    def subcommands(cls) -> "list[type[BaseCommand]]":
        return [c for c in cls.commands if c.__bases__[0] is cls]


class RootCommand(
    BaseCommand,
    cmd=None,
    description="Embed files into Python modules as base64 assets",
):
    @classmethod
    def configure_args(cls, gc: "GlobalConfig", p: argparse.ArgumentParser) -> None:
        from .version_cli import cli_version

        p.add_argument(
            "-V",
            "--version",
            action="store_const",
            dest="func",
            const=cli_version,
            help="Print version information",
        )
        p.add_argument(
            "--porcelain",
            action="store_true",
            help="Give the output in a machine-friendly format if applicable",
        )

    @classmethod
    def main(cls, cfg: "GlobalConfig", args: argparse.Namespace) -> int:
        args._parser.print_help()  # pylint: disable=protected-access
        return 0

    @classmethod
    def build_argparse(cls, gc: "GlobalConfig") -> argparse.ArgumentParser:
        p = argparse.ArgumentParser(
            prog=PRECOMPILED_ENTRYPOINT_NAME,
            description=cls.description,
        )
        cls.configure_args(gc, p)
        p.set_defaults(func=cls.main)

        sp = p.add_subparsers(title="subcommands")
        for sub in cls.subcommands():
            assert sub.cmd is not None
            subp = sp.add_parser(sub.cmd, help=sub.help, description=sub.description)
            sub.configure_args(gc, subp)
            subp.set_defaults(func=sub.main)

        return p
