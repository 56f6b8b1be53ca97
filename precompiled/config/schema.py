from typing import Final, Mapping, Sequence, TypeGuard

from .errors import InvalidConfigKeyError, InvalidConfigValueTypeError

KEY_DIRS: Final = "dirs"
KEY_PATH_ALIASES: Final = "path_aliases"


def validate_key(key: str) -> None:
    if key not in (KEY_DIRS, KEY_PATH_ALIASES):
        raise InvalidConfigKeyError(key)


def _is_all_str(obj: object) -> TypeGuard[Sequence[str]]:
    if isinstance(obj, str) or not isinstance(obj, Sequence):
        return False
    return all(isinstance(i, str) for i in obj)


def _is_str_mapping(obj: object) -> TypeGuard[Mapping[str, str]]:
    if not isinstance(obj, Mapping):
        return False
    return all(isinstance(k, str) and isinstance(v, str) for k, v in obj.items())


def ensure_dirs(val: object) -> list[str]:
    if not _is_all_str(val):
        raise InvalidConfigValueTypeError(KEY_DIRS, val, list)
    return list(val)


def ensure_path_aliases(val: object) -> dict[str, str]:
    if not _is_str_mapping(val):
        raise InvalidConfigValueTypeError(KEY_PATH_ALIASES, val, dict)
    return dict(val)
