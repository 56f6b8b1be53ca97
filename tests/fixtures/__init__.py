from contextlib import redirect_stderr, redirect_stdout
from dataclasses import dataclass
import io
import pathlib
from typing import Iterator

import pytest

from precompiled.cli.main import main as precompiled_main
from precompiled.config import GlobalConfig
from precompiled.log import (
    PrecompiledConsoleLogger,
    PrecompiledLogger,
    set_default_logger,
)
from precompiled.utils.global_mode import EnvGlobalModeProvider, GlobalModeProvider


class MockGlobalModeProvider(GlobalModeProvider):
    def __init__(
        self,
        is_debug: bool = False,
        is_porcelain: bool = False,
    ) -> None:
        self._is_debug = is_debug
        self._is_porcelain = is_porcelain

    @property
    def argv0(self) -> str:
        return "precompiled"

    @property
    def is_debug(self) -> bool:
        return self._is_debug

    @property
    def is_porcelain(self) -> bool:
        return self._is_porcelain

    @is_porcelain.setter
    def is_porcelain(self, v: bool) -> None:
        self._is_porcelain = v


def _make_capturing_stream() -> io.TextIOWrapper:
    # backed by bytes so the porcelain sinks can write to .buffer
    return io.TextIOWrapper(io.BytesIO(), encoding="utf-8", write_through=True)


def _drain(stream: io.TextIOWrapper) -> str:
    stream.flush()
    buf = stream.buffer
    assert isinstance(buf, io.BytesIO)
    return buf.getvalue().decode("utf-8")


class CapturingLogger:
    """A console logger writing into in-memory streams."""

    def __init__(self, gm: GlobalModeProvider) -> None:
        self._stdout = _make_capturing_stream()
        self._stderr = _make_capturing_stream()
        self.logger = PrecompiledConsoleLogger(
            gm,
            stdout=self._stdout,
            stderr=self._stderr,
        )

    @property
    def stdout(self) -> str:
        return _drain(self._stdout)

    @property
    def stderr(self) -> str:
        return _drain(self._stderr)


@pytest.fixture(autouse=True)
def _plain_console_output(monkeypatch: pytest.MonkeyPatch) -> None:
    # rich would emit ANSI escapes into captured output otherwise
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)


@pytest.fixture
def mock_gm() -> MockGlobalModeProvider:
    return MockGlobalModeProvider()


@pytest.fixture
def precompiled_logger(mock_gm: GlobalModeProvider) -> PrecompiledLogger:
    """Fixture for creating a PrecompiledLogger instance."""
    return PrecompiledConsoleLogger(mock_gm)


@pytest.fixture
def capturing_logger(mock_gm: GlobalModeProvider) -> Iterator[CapturingLogger]:
    """A capturing logger, also installed as the process-wide default."""
    cl = CapturingLogger(mock_gm)
    set_default_logger(cl.logger)
    yield cl
    set_default_logger(None)


@dataclass
class CLIRunResult:
    exit_code: int
    stdout: str
    stderr: str


class CLITestHarness:
    def __init__(self, env: dict[str, str], workdir: pathlib.Path) -> None:
        self._env = env
        self.workdir = workdir

    def __call__(self, *args: str) -> CLIRunResult:
        return self.run(*args)

    def run(self, *args: str) -> CLIRunResult:
        argv = ["precompiled", *args]
        stdout_io = _make_capturing_stream()
        stderr_io = _make_capturing_stream()
        with redirect_stdout(stdout_io), redirect_stderr(stderr_io):
            gm = EnvGlobalModeProvider(self._env, argv)
            logger = PrecompiledConsoleLogger(gm, stdout=stdout_io, stderr=stderr_io)
            set_default_logger(logger)
            try:
                gc = GlobalConfig(gm, logger)
                exit_code = precompiled_main(gm, gc, argv)
            finally:
                set_default_logger(None)
        return CLIRunResult(exit_code, _drain(stdout_io), _drain(stderr_io))

    def write_file(self, relpath: str, content: str | bytes) -> pathlib.Path:
        p = self.workdir / relpath
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_text(content, encoding="utf-8")
        return p


@pytest.fixture
def precompiled_cli_runner(
    tmp_path: pathlib.Path,
    monkeypatch: pytest.MonkeyPatch,
) -> CLITestHarness:
    workdir = tmp_path / "project"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.delenv("PRECOMPILED_DEBUG", raising=False)
    return CLITestHarness({}, workdir)
