import base64
import pathlib
import time
from typing import Final, Iterable, Mapping, NamedTuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import PrecompileConfig
    from .log import PrecompiledLogger

from .scanner import scan_dirs
from .version import PRECOMPILED_SEMVER

MODULE_TEMPLATE_NAME: Final = "precompiled_module.py"


class PrecompileResult(NamedTuple):
    keys: list[str]
    out: pathlib.Path | None
    """Path of the generated module, or None for dry runs"""
    elapsed: float
    """Wall-clock time taken in seconds"""


def encode_asset(data: bytes) -> str:
    """Encodes an asset payload as standard base64 with the trailing padding
    stripped."""
    return base64.b64encode(data).decode("ascii").rstrip("=")


def render_module(assets: Mapping[str, str]) -> str:
    from .utils.templating import render_template_str

    return render_template_str(
        MODULE_TEMPLATE_NAME,
        {
            "version": PRECOMPILED_SEMVER,
            "assets": sorted(assets.items()),
        },
    )


def format_elapsed(seconds: float) -> str:
    millis = int(seconds * 1000)
    if millis < 1000:
        return f"{millis}ms"
    return f"{int(seconds)}s"


def precompile(
    dirs: Iterable[pathlib.Path],
    out: pathlib.Path,
    *,
    config: "PrecompileConfig",
    dry_run: bool = False,
    logger: "PrecompiledLogger | None" = None,
) -> PrecompileResult:
    start = time.monotonic()

    sites = scan_dirs(dirs, config, logger)
    keys = [site.key for site in sites]

    if dry_run:
        return PrecompileResult(keys, None, time.monotonic() - start)

    assets: dict[str, str] = {}
    for site in sites:
        with open(site.target, "rb") as fp:
            assets[site.key] = encode_asset(fp.read())

    content = render_module(assets)
    with open(out, "w", encoding="utf-8") as fp:
        fp.write(content)

    return PrecompileResult(keys, out, time.monotonic() - start)
