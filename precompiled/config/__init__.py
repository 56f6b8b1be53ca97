import os
import pathlib
from typing import Any, Final, TYPE_CHECKING

if TYPE_CHECKING:
    from typing_extensions import Self

    from ..log import PrecompiledLogger
    from ..utils.global_mode import GlobalModeProvider

from . import errors
from . import schema

DEFAULT_CONFIG_FILENAME: Final = "precompiled.toml"
DEFAULT_OUTPUT_FILENAME: Final = "precompiled_assets.py"
DIR_LIST_SEPARATOR: Final = ":"


def absolutize(p: str | os.PathLike[str]) -> pathlib.Path:
    """Makes ``p`` absolute and normalizes it lexically, without resolving
    symlinks."""
    return pathlib.Path(os.path.abspath(p))


class GlobalConfig:
    def __init__(self, gm: "GlobalModeProvider", logger: "PrecompiledLogger") -> None:
        self._gm = gm
        self.logger = logger

    @property
    def is_porcelain(self) -> bool:
        return self._gm.is_porcelain


class PrecompileConfig:
    def __init__(
        self,
        path: pathlib.Path | None = None,
        dirs: list[str] | None = None,
        path_aliases: dict[str, str] | None = None,
    ) -> None:
        self.path = path
        self.dirs = dirs or []
        self.path_aliases = path_aliases or {}

    @property
    def base_dir(self) -> pathlib.Path:
        if self.path is None:
            return absolutize(os.curdir)
        return absolutize(self.path).parent

    @classmethod
    def load(
        cls,
        path: str | os.PathLike[str],
        logger: "PrecompiledLogger | None" = None,
    ) -> "Self":
        from rich.markup import escape
        import tomlkit
        from tomlkit.exceptions import ParseError

        config_path = pathlib.Path(path)
        try:
            with open(config_path, "rb") as fp:
                data: Any = tomlkit.load(fp).unwrap()
        except FileNotFoundError:
            if logger is not None:
                logger.D(
                    f"config file {escape(str(config_path))} not found, using defaults"
                )
            return cls(config_path)
        except ParseError as e:
            raise errors.MalformedConfigFileError(config_path, str(e)) from e

        if logger is not None:
            logger.D(
                f"applying config from {escape(str(config_path))}: {escape(str(data))}"
            )

        obj = cls(config_path)
        obj._apply_config(data)
        return obj

    def _apply_config(self, data: dict[str, object]) -> None:
        for k in data.keys():
            schema.validate_key(k)

        if (dirs := data.get(schema.KEY_DIRS)) is not None:
            self.dirs = schema.ensure_dirs(dirs)

        if (aliases := data.get(schema.KEY_PATH_ALIASES)) is not None:
            self.path_aliases = schema.ensure_path_aliases(aliases)

    def effective_dirs(self, default: str) -> list[pathlib.Path]:
        """Returns the directories to scan. Configured ``dirs`` take precedence
        over ``default``, which may name several directories separated by
        colons. Entries that are not existing directories are dropped."""

        if self.dirs:
            candidates = [self.base_dir / d for d in self.dirs]
        else:
            candidates = [
                pathlib.Path(d) for d in default.split(DIR_LIST_SEPARATOR) if d
            ]

        result: list[pathlib.Path] = []
        for c in candidates:
            p = absolutize(c)
            if p.is_dir() and p not in result:
                result.append(p)
        return result

    def resolve_aliases(self, scan_dir: pathlib.Path) -> dict[str, pathlib.Path]:
        result: dict[str, pathlib.Path] = {}
        for alias, target in self.path_aliases.items():
            p = pathlib.Path(target)
            p = absolutize(p) if p.is_absolute() else absolutize(scan_dir / p)
            if p.exists():
                result[alias] = p
        return result


def dump_default_config() -> str:
    import tomlkit

    doc = tomlkit.document()
    doc.add(tomlkit.comment("Configuration for precompiled."))
    doc.add(tomlkit.comment(""))
    doc.add(
        tomlkit.comment(
            "dirs: directories to scan for resolve_text() / resolve_bytes() calls,"
        )
    )
    doc.add(tomlkit.comment("relative to this file; overrides the command line"))
    doc.add(
        tomlkit.comment(
            "path_aliases: prefixes substituted in include paths before resolution"
        )
    )
    doc.add(tomlkit.nl())
    doc.add(schema.KEY_DIRS, tomlkit.array())
    doc.add(tomlkit.nl())
    doc.add(schema.KEY_PATH_ALIASES, tomlkit.table())
    return tomlkit.dumps(doc)
