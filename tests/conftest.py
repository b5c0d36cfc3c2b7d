"""Shared fixtures for reader tests"""
from typing import Iterable, Optional
import pytest
import structlog

from config import Config
from environment.context import HostContext


class FakeInvoker:
    """Stands in for ProcessInvoker, replaying canned output lines"""

    def __init__(self, stdout: Iterable[str] = (), stderr: Iterable[str] = (),
                 exit_code: int = 0, error: Optional[Exception] = None):
        self.stdout = list(stdout)
        self.stderr = list(stderr)
        self.exit_code = exit_code
        self.error = error
        self.calls = []
        self.closed = False
        self._stdout_callbacks = []
        self._stderr_callbacks = []

    def on_stdout(self, callback):
        self._stdout_callbacks.append(callback)

    def on_stderr(self, callback):
        self._stderr_callbacks.append(callback)

    def execute(self, working_directory, file_name, arguments, environment=None, cancel_event=None):
        self.calls.append({
            "working_directory": working_directory,
            "file_name": file_name,
            "arguments": list(arguments),
            "environment": environment,
            "cancel_event": cancel_event,
        })
        if self.error is not None:
            raise self.error
        for line in self.stdout:
            for callback in self._stdout_callbacks:
                callback(line)
        for line in self.stderr:
            for callback in self._stderr_callbacks:
                callback(line)
        return self.exit_code

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def config(tmp_path):
    return Config(root_directory=tmp_path)


@pytest.fixture
def host_context(config):
    return HostContext(config)


@pytest.fixture
def install_invoker(host_context, monkeypatch):
    """Make host_context hand out a FakeInvoker built from the given kwargs"""
    def install(**kwargs) -> FakeInvoker:
        invoker = FakeInvoker(**kwargs)
        monkeypatch.setattr(host_context, "create_process_invoker", lambda: invoker)
        return invoker
    return install
