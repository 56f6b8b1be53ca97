"""
Run-time side of precompiled: lookup and decoding of embedded assets.

Asset payloads are stored as standard-alphabet base64 literals, usually with
their trailing ``=`` padding stripped by the generator. Decoding restores the
padding before handing the payload to :func:`base64.b64decode`.

Failures are treated asymmetrically:

* an unknown path is a build error (the generator did not see the include
  site), so the drop-in resolvers terminate the process;
* a malformed payload decodes to an empty value, unless the caller opts into
  the ``try_*`` variants which return ``None`` instead.
"""

import base64
import os
import sys
import threading
from typing import Iterator, Mapping, NoReturn


class DecodeError(ValueError):
    def __init__(self, payload: str | bytes, reason: str) -> None:
        super().__init__()
        self._payload = payload
        self._reason = reason

    @property
    def payload(self) -> str | bytes:
        return self._payload

    def __str__(self) -> str:
        return f"malformed base64 payload: {self._reason}"

    def __repr__(self) -> str:
        return f"DecodeError({self._payload!r}, {self._reason!r})"


class AssetNotFoundError(KeyError):
    def __init__(self, path: str) -> None:
        super().__init__(path)
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def __str__(self) -> str:
        return f"include file not found: {self._path}"

    def __repr__(self) -> str:
        return f"AssetNotFoundError({self._path!r})"


def decode_padded_base64(encoded: str | bytes) -> bytes:
    """Decodes standard-alphabet base64, appending missing ``=`` padding
    first.

    Raises :class:`DecodeError` if the (padded) input is not valid base64.
    """

    remainder = len(encoded) % 4
    if remainder > 0:
        if isinstance(encoded, str):
            encoded += "=" * (4 - remainder)
        else:
            encoded += b"=" * (4 - remainder)

    try:
        return base64.b64decode(encoded, validate=True)
    except ValueError as e:
        # binascii.Error for bad alphabet or length, plain ValueError for
        # non-ASCII str input
        raise DecodeError(encoded, str(e)) from e


def try_decode_padded_base64(encoded: str | bytes) -> bytes | None:
    try:
        return decode_padded_base64(encoded)
    except DecodeError:
        return None


class AssetTable(Mapping[str, str]):
    """Immutable mapping from logical asset path to its base64 payload."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    def __getitem__(self, path: str) -> str:
        try:
            return self._entries[path]
        except KeyError:
            raise AssetNotFoundError(path) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<AssetTable with {len(self._entries)} entries>"

    def lookup(self, path: str) -> str:
        return self[path]

    def try_resolve_bytes(self, path: str) -> bytes | None:
        return try_decode_padded_base64(self.lookup(path))

    def resolve_bytes(self, path: str) -> bytes:
        data = self.try_resolve_bytes(path)
        return b"" if data is None else data

    def try_resolve_text(self, path: str) -> str | None:
        data = self.try_resolve_bytes(path)
        if data is None:
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return None

    def resolve_text(self, path: str) -> str:
        text = self.try_resolve_text(path)
        return "" if text is None else text


def _die_on_missing_asset(e: AssetNotFoundError) -> NoReturn:
    from rich.markup import escape

    from .log import get_default_logger

    get_default_logger().F(escape(str(e)))

    if threading.current_thread() is threading.main_thread():
        raise SystemExit(1) from e

    # SystemExit only ends the calling thread elsewhere
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(1)


def resolve_bytes(table: AssetTable, path: str) -> bytes:
    """Returns the decoded bytes of the asset at ``path``, or empty bytes if
    the payload is malformed. Terminates the process if ``path`` is unknown."""

    try:
        return table.resolve_bytes(path)
    except AssetNotFoundError as e:
        _die_on_missing_asset(e)


def resolve_text(table: AssetTable, path: str) -> str:
    """Returns the asset at ``path`` as UTF-8 text, or an empty string if the
    payload is malformed. Terminates the process if ``path`` is unknown."""

    try:
        return table.resolve_text(path)
    except AssetNotFoundError as e:
        _die_on_missing_asset(e)
