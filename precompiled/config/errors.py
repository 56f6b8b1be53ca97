from os import PathLike
from typing import Any


class InvalidConfigKeyError(Exception):
    def __init__(self, key: str) -> None:
        super().__init__()
        self._key = key

    def __str__(self) -> str:
        return f"invalid config key: {self._key}"

    def __repr__(self) -> str:
        return f"InvalidConfigKeyError({self._key!r})"


class InvalidConfigValueTypeError(TypeError):
    def __init__(
        self,
        key: str,
        val: object | None,
        expected: type,
    ) -> None:
        super().__init__()
        self._key = key
        self._val = val
        self._expected = expected

    def __str__(self) -> str:
        return f"invalid value type for config key {self._key}: {type(self._val)}, expected {self._expected}"

    def __repr__(self) -> str:
        return f"InvalidConfigValueTypeError({self._key!r}, {self._val!r}, {self._expected!r})"


class MalformedConfigFileError(Exception):
    def __init__(self, path: PathLike[Any], reason: str | None = None) -> None:
        super().__init__()
        self._path = path
        self._reason = reason

    def __str__(self) -> str:
        if self._reason:
            return f"malformed config file: {self._path}: {self._reason}"
        return f"malformed config file: {self._path}"

    def __repr__(self) -> str:
        return f"MalformedConfigFileError({self._path!r}, {self._reason!r})"
