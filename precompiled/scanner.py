import enum
import pathlib
import re
from typing import Final, Iterable, Iterator, NamedTuple, TYPE_CHECKING

from rich.markup import escape

if TYPE_CHECKING:
    from .config import PrecompileConfig
    from .log import PrecompiledLogger

from .config import absolutize


class IncludeKind(enum.Enum):
    TEXT = "text"
    BYTES = "bytes"


INCLUDE_PATTERNS: Final[dict[IncludeKind, re.Pattern[str]]] = {
    IncludeKind.TEXT: re.compile(r"""resolve_text\s*\(\s*["']([^"']+)["']\s*\)"""),
    IncludeKind.BYTES: re.compile(r"""resolve_bytes\s*\(\s*["']([^"']+)["']\s*\)"""),
}

SOURCE_GLOB: Final = "**/*.py"


class IncludeSite(NamedTuple):
    source: pathlib.Path
    line: int
    kind: IncludeKind
    key: str
    target: pathlib.Path


class MissingIncludeError(Exception):
    def __init__(self, site: IncludeSite) -> None:
        super().__init__()
        self.site = site

    def __str__(self) -> str:
        s = self.site
        return f"{s.source}:{s.line}: resolve_{s.kind.value}() call references non-existent file {s.target}"

    def __repr__(self) -> str:
        return f"MissingIncludeError({self.site!r})"


class UndecodableSourceError(Exception):
    def __init__(self, source: pathlib.Path, reason: str) -> None:
        super().__init__()
        self.source = source
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.source} is not valid UTF-8: {self.reason}"

    def __repr__(self) -> str:
        return f"UndecodableSourceError({self.source!r}, {self.reason!r})"


def apply_aliases(key: str, aliases: dict[str, pathlib.Path]) -> str:
    for alias, target in aliases.items():
        key = key.replace(alias, str(target))
    return key


def resolve_include_path(
    key: str,
    source: pathlib.Path,
    aliases: dict[str, pathlib.Path],
) -> pathlib.Path:
    p = pathlib.Path(apply_aliases(key, aliases))
    if p.is_absolute():
        return absolutize(p)
    return absolutize(source.parent / p)


def _line_of(content: str, offset: int) -> int:
    return content.count("\n", 0, offset) + 1


def scan_source(
    source: pathlib.Path,
    content: str,
    aliases: dict[str, pathlib.Path],
) -> Iterator[IncludeSite]:
    """Yields the include sites found in one source file, text includes first,
    each kind in order of appearance."""

    for kind, pattern in INCLUDE_PATTERNS.items():
        for m in pattern.finditer(content):
            key = m.group(1)
            yield IncludeSite(
                source=source,
                line=_line_of(content, m.start()),
                kind=kind,
                key=key,
                target=resolve_include_path(key, source, aliases),
            )


def iter_sources(scan_dir: pathlib.Path) -> Iterator[pathlib.Path]:
    for p in sorted(scan_dir.glob(SOURCE_GLOB)):
        if p.is_file():
            yield absolutize(p)


def scan_dirs(
    dirs: Iterable[pathlib.Path],
    config: "PrecompileConfig",
    logger: "PrecompiledLogger | None" = None,
) -> list[IncludeSite]:
    """Collects the include sites under ``dirs``, one per distinct key.

    Raises :class:`MissingIncludeError` on the first site whose target file
    does not exist, and :class:`UndecodableSourceError` on a source file that
    is not UTF-8.
    """

    seen_keys: set[str] = set()
    result: list[IncludeSite] = []
    for scan_dir in dirs:
        aliases = config.resolve_aliases(scan_dir)
        for source in iter_sources(scan_dir):
            try:
                content = source.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                raise UndecodableSourceError(source, str(e)) from e
            for site in scan_source(source, content, aliases):
                if not site.target.is_file():
                    raise MissingIncludeError(site)
                if site.key in seen_keys:
                    continue
                if logger is not None:
                    logger.D(
                        f"found {escape(site.key)} at {escape(str(site.source))}:{site.line}"
                    )
                seen_keys.add(site.key)
                result.append(site)
    return result
