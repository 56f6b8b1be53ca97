import abc
import datetime
from functools import cached_property
import io
import os
import sys
import time
from typing import Any, Final, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    # too heavy at package import time
    from rich.console import Console, RenderableType
    from rich.text import Text

from ..utils.global_mode import EnvGlobalModeProvider, GlobalModeProvider
from ..utils.porcelain import PorcelainEntity, PorcelainEntityType, PorcelainOutput


class PorcelainLog(PorcelainEntity):
    t: int
    """Timestamp of the message line in microseconds"""

    lvl: str
    """Log level of the message line (one of D, F, I, W)"""

    msg: str
    """Message content"""


def log_time_formatter(x: datetime.datetime) -> "Text":
    from rich.text import Text

    return Text(f"debug: [{x.isoformat()}]")


def _make_porcelain_log(
    t: int,
    lvl: str,
    message: "RenderableType",
    sep: str,
    *objects: Any,
) -> PorcelainLog:
    from rich.console import Console

    with io.StringIO() as buf:
        tmp_console = Console(file=buf)
        tmp_console.print(message, *objects, sep=sep, end="")
        return {
            "ty": PorcelainEntityType.LogV1,
            "t": t,
            "lvl": lvl,
            "msg": buf.getvalue(),
        }


class PrecompiledLogger(metaclass=abc.ABCMeta):
    """Leveled logger. ``D`` (debug) only prints when debugging is on, ``F``,
    ``I`` and ``W`` (fatal, info, warning) always print. Everything goes to
    stderr except :meth:`stdout` and :meth:`emit_porcelain`."""

    @property
    @abc.abstractmethod
    def log_console(self) -> "Console":
        raise NotImplementedError

    @abc.abstractmethod
    def stdout(
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def emit_porcelain(self, obj: PorcelainEntity) -> None:
        """Emit a machine-readable entity on stdout."""
        raise NotImplementedError

    @abc.abstractmethod
    def D(
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def F(
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def I(  # noqa: E743 # single-letter like the other levels
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def W(
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        raise NotImplementedError


_LEVEL_PREFIXES: Final = {
    "F": "[bold red]fatal error:[/]",
    "I": "[bold green]info:[/]",
    "W": "[bold yellow]warn:[/]",
}


class PrecompiledConsoleLogger(PrecompiledLogger):
    def __init__(
        self,
        gm: GlobalModeProvider,
        stdout: TextIO = sys.stdout,
        stderr: TextIO = sys.stderr,
    ) -> None:
        self._gm = gm
        self._stdout = stdout
        self._stderr = stderr

    def _make_console(self, file: TextIO, **kwargs: Any) -> "Console":
        from rich.console import Console

        return Console(file=file, soft_wrap=True, **kwargs)

    @cached_property
    def _stdout_console(self) -> "Console":
        return self._make_console(self._stdout, highlight=False)

    @cached_property
    def _debug_console(self) -> "Console":
        return self._make_console(self._stderr, log_time_format=log_time_formatter)

    @cached_property
    def _log_console(self) -> "Console":
        return self._make_console(self._stderr, highlight=False)

    # porcelain log lines go to stderr, porcelain results to stdout
    @cached_property
    def _porcelain_log_sink(self) -> PorcelainOutput:
        return PorcelainOutput(self._stderr.buffer)

    @cached_property
    def _porcelain_result_sink(self) -> PorcelainOutput:
        return PorcelainOutput(self._stdout.buffer)

    @property
    def log_console(self) -> "Console":
        return self._log_console

    def _emit_porcelain_log(
        self,
        lvl: str,
        message: "RenderableType",
        sep: str,
        *objects: Any,
    ) -> None:
        t = int(time.time() * 1000000)
        obj = _make_porcelain_log(t, lvl, message, sep, *objects)
        self._stderr.flush()
        with self._porcelain_log_sink as sink:
            sink.emit(obj)

    def _log(
        self,
        lvl: str,
        message: "RenderableType",
        objects: tuple[Any, ...],
        sep: str,
        end: str,
    ) -> None:
        if self._gm.is_porcelain:
            return self._emit_porcelain_log(lvl, message, sep, *objects)

        return self.log_console.print(
            f"{_LEVEL_PREFIXES[lvl]} {message}",
            *objects,
            sep=sep,
            end=end,
        )

    def stdout(
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        return self._stdout_console.print(message, *objects, sep=sep, end=end)

    def emit_porcelain(self, obj: PorcelainEntity) -> None:
        self._stdout.flush()
        with self._porcelain_result_sink as sink:
            sink.emit(obj)

    def D(
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        if not self._gm.is_debug:
            return

        if self._gm.is_porcelain:
            return self._emit_porcelain_log("D", message, sep, *objects)

        # attribute the line to our caller, not to this method
        return self._debug_console.log(
            message,
            *objects,
            sep=sep,
            end=end,
            _stack_offset=2,
        )

    def F(
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        return self._log("F", message, objects, sep, end)

    def I(  # noqa: E743 # single-letter like the other levels
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        return self._log("I", message, objects, sep, end)

    def W(
        self,
        message: "RenderableType",
        *objects: Any,
        sep: str = " ",
        end: str = "\n",
    ) -> None:
        return self._log("W", message, objects, sep, end)


_default_logger: PrecompiledLogger | None = None


def get_default_logger() -> PrecompiledLogger:
    """Returns the process-wide logger used outside of CLI invocations, e.g.
    by generated asset modules at run time."""

    global _default_logger
    if _default_logger is None:
        gm = EnvGlobalModeProvider(os.environ, sys.argv)
        _default_logger = PrecompiledConsoleLogger(gm, sys.stdout, sys.stderr)
    return _default_logger


def set_default_logger(logger: PrecompiledLogger | None) -> None:
    global _default_logger
    _default_logger = logger
