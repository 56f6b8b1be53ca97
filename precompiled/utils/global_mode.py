import abc
import os
from typing import Final, Mapping

ENV_DEBUG: Final = "PRECOMPILED_DEBUG"

TRUTHY_ENV_VAR_VALUES: Final = {"1", "true", "x", "y", "yes"}


def is_env_var_truthy(env: Mapping[str, str], var: str) -> bool:
    if v := env.get(var):
        return v.lower() in TRUTHY_ENV_VAR_VALUES
    return False


class GlobalModeProvider(metaclass=abc.ABCMeta):
    """Process-wide switches read by the logger and the CLI.

    ``is_porcelain`` is writable because it is first guessed from ``argv``,
    so that early log lines are formatted right, and later settled by the
    parsed arguments.
    """

    @property
    @abc.abstractmethod
    def argv0(self) -> str: ...

    @property
    @abc.abstractmethod
    def is_debug(self) -> bool: ...

    @property
    @abc.abstractmethod
    def is_porcelain(self) -> bool: ...

    @is_porcelain.setter
    @abc.abstractmethod
    def is_porcelain(self, v: bool) -> None: ...


def _porcelain_requested(argv: list[str]) -> bool:
    # only accepted as the first argument, before any subcommand
    return len(argv) > 1 and argv[1] == "--porcelain"


class EnvGlobalModeProvider(GlobalModeProvider):
    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        argv: list[str] | None = None,
    ) -> None:
        if env is None:
            env = os.environ
        argv = argv or []

        self._argv0 = argv[0] if argv else ""
        self._is_debug = is_env_var_truthy(env, ENV_DEBUG)
        self._is_porcelain = _porcelain_requested(argv)

    @property
    def argv0(self) -> str:
        return self._argv0

    @property
    def is_debug(self) -> bool:
        return self._is_debug

    @property
    def is_porcelain(self) -> bool:
        return self._is_porcelain

    @is_porcelain.setter
    def is_porcelain(self, v: bool) -> None:
        self._is_porcelain = v
