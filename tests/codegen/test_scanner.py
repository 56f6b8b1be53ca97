import pathlib

import pytest

from precompiled.config import PrecompileConfig
from precompiled.scanner import (
    IncludeKind,
    MissingIncludeError,
    UndecodableSourceError,
    apply_aliases,
    resolve_include_path,
    scan_dirs,
    scan_source,
)


def _write(p: pathlib.Path, content: str) -> pathlib.Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")
    return p


def test_scan_source(tmp_path: pathlib.Path) -> None:
    src = tmp_path / "pkg" / "mod.py"
    content = """\
from .precompiled_assets import resolve_bytes, resolve_text

BANNER = resolve_text("banner.txt")
ICON = resolve_bytes( 'img/icon.png' )
OTHER = resolve_text(
    "../shared.txt"
)
NOT_LITERAL = resolve_text(name)
"""
    sites = list(scan_source(src, content, {}))
    assert [(s.kind, s.key, s.line) for s in sites] == [
        (IncludeKind.TEXT, "banner.txt", 3),
        (IncludeKind.TEXT, "../shared.txt", 5),
        (IncludeKind.BYTES, "img/icon.png", 4),
    ]
    assert sites[0].target == tmp_path / "pkg" / "banner.txt"
    assert sites[1].target == tmp_path / "shared.txt"
    assert sites[2].target == tmp_path / "pkg" / "img" / "icon.png"
    assert all(s.source == src for s in sites)


def test_aliases(tmp_path: pathlib.Path) -> None:
    aliases = {"@res": tmp_path / "resources"}
    assert apply_aliases("@res/a.txt", aliases) == f"{tmp_path}/resources/a.txt"
    assert apply_aliases("a.txt", aliases) == "a.txt"

    source = tmp_path / "src" / "mod.py"
    assert (
        resolve_include_path("@res/a.txt", source, aliases)
        == tmp_path / "resources" / "a.txt"
    )
    assert resolve_include_path("a.txt", source, aliases) == tmp_path / "src" / "a.txt"
    assert (
        resolve_include_path(str(tmp_path / "x" / ".." / "y.txt"), source, {})
        == tmp_path / "y.txt"
    )


def test_scan_dirs(tmp_path: pathlib.Path) -> None:
    root = tmp_path / "src"
    _write(root / "a.txt", "A")
    _write(root / "res" / "b.bin", "B")
    _write(root / "one.py", 'x = resolve_text("a.txt")\n')
    _write(
        root / "sub" / "two.py",
        'y = resolve_bytes("@res/b.bin")\nz = resolve_text("a.txt")\n',
    )
    _write(root / "sub" / "a.txt", "shadowed")
    _write(root / "notes.md", 'resolve_text("missing.txt")\n')

    cfg = PrecompileConfig(path_aliases={"@res": "res"})
    sites = scan_dirs([root], cfg)

    # deduplicated by literal key; the first occurrence wins
    assert [s.key for s in sites] == ["a.txt", "@res/b.bin"]
    assert sites[0].target == root / "a.txt"
    assert sites[1].target == root / "res" / "b.bin"
    assert sites[1].source == root / "sub" / "two.py"


def test_scan_dirs_missing_include(tmp_path: pathlib.Path) -> None:
    root = tmp_path / "src"
    src = _write(root / "mod.py", '\n\nx = resolve_bytes("nope.bin")\n')

    with pytest.raises(MissingIncludeError) as excinfo:
        scan_dirs([root], PrecompileConfig())

    site = excinfo.value.site
    assert site.source == src
    assert site.line == 3
    assert site.kind == IncludeKind.BYTES
    assert site.target == root / "nope.bin"
    assert str(excinfo.value) == (
        f"{src}:3: resolve_bytes() call references non-existent file {root / 'nope.bin'}"
    )


def test_scan_dirs_directory_target_is_missing(tmp_path: pathlib.Path) -> None:
    root = tmp_path / "src"
    (root / "adir").mkdir(parents=True)
    _write(root / "mod.py", 'x = resolve_text("adir")\n')

    with pytest.raises(MissingIncludeError):
        scan_dirs([root], PrecompileConfig())


def test_scan_dirs_undecodable_source(tmp_path: pathlib.Path) -> None:
    root = tmp_path / "src"
    root.mkdir()
    _write(root / "a.txt", "A")
    src = root / "legacy.py"
    src.write_bytes(b"# \xff\xfe\nx = resolve_text('a.txt')\n")

    with pytest.raises(UndecodableSourceError) as excinfo:
        scan_dirs([root], PrecompileConfig())

    assert excinfo.value.source == src
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
    assert str(excinfo.value).startswith(f"{src} is not valid UTF-8: ")
