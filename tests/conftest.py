from __future__ import annotations

import copy
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from sparrow_installer.config.paths import reset_paths
from sparrow_installer.config.settings import settings
from sparrow_installer.config.theme import AppConfig, load_app_config
from sparrow_installer.models.session import Session
from sparrow_installer.orchestration.state_machine import InstallerStateMachine
from sparrow_installer.runtime.command_runner import (
    CommandEvent,
    CommandResult,
    PrivilegedCommandRunner,
)
from sparrow_installer.runtime.commands import CommandSpec


@pytest.fixture(autouse=True)
def isolate_settings(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Iterator[None]:
    """Point XDG dirs at tmp_path and start from built-in settings."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    reset_paths()
    original_data = copy.deepcopy(settings._data)
    settings._data = {}
    try:
        yield
    finally:
        settings._data = original_data
        reset_paths()


class ManualClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRunner(PrivilegedCommandRunner):
    """Records calls and replays queued outcomes instead of spawning."""

    def __init__(self, *, dry_run: bool = False) -> None:
        super().__init__(dry_run=dry_run)
        self.calls: list[tuple[CommandSpec, str | None]] = []
        self.outcomes: list[BaseException | None] = []
        self.before_return: Callable[[], None] | None = None

    async def run(
        self,
        spec: CommandSpec,
        secret: str | None = None,
        *,
        on_event: Callable[[CommandEvent], None] | None = None,
    ) -> CommandResult:
        self.calls.append((spec, secret))
        if self.before_return is not None:
            self.before_return()
        if self.outcomes:
            outcome = self.outcomes.pop(0)
            if outcome is not None:
                raise outcome
        return CommandResult(
            command=spec.display,
            exit_code=0,
            stdout="",
            stderr="",
            duration_seconds=0.0,
            dry_run=self.dry_run,
        )


@pytest.fixture
def anyio_backend() -> str:
    """The runner is built on asyncio subprocesses, so run async tests on asyncio."""
    return "asyncio"


@pytest.fixture(scope="session")
def app_config() -> AppConfig:
    return load_app_config()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


MachineFactory = Callable[..., tuple[InstallerStateMachine, FakeRunner]]


@pytest.fixture
def make_machine(app_config: AppConfig, clock: ManualClock) -> MachineFactory:
    """Build a state machine over a fresh session and a FakeRunner."""

    def _make(dry_run: bool = False) -> tuple[InstallerStateMachine, FakeRunner]:
        runner = FakeRunner(dry_run=dry_run)
        machine = InstallerStateMachine(
            Session(dry_run=dry_run),
            app_config,
            runner,
            settings=settings,
            clock=clock,
        )
        return machine, runner

    return _make


@pytest.fixture
def fake_runner_cls() -> type[FakeRunner]:
    return FakeRunner
