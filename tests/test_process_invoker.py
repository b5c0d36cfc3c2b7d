"""Tests for the subprocess invoker, using the running interpreter as the child"""
import sys
import threading
import time
from pathlib import Path
import pytest

from utils.process_invoker import ProcessInvoker


def python_args(code):
    return ["-c", code]


class TestProcessInvoker:
    """Test output delivery, exit codes and cleanup"""

    def test_streams_stdout_and_stderr(self, tmp_path):
        stdout, stderr = [], []
        code = "import sys\nfor i in range(200): print(f'line {i}')\nsys.stderr.write('oops\\n')"

        with ProcessInvoker() as invoker:
            invoker.on_stdout(stdout.append)
            invoker.on_stderr(stderr.append)
            exit_code = invoker.execute(tmp_path, sys.executable, python_args(code))

        assert exit_code == 0
        assert stdout == [f"line {i}" for i in range(200)]
        assert stderr == ["oops"]

    def test_exit_code(self, tmp_path):
        with ProcessInvoker() as invoker:
            assert invoker.execute(tmp_path, sys.executable, python_args("raise SystemExit(3)")) == 3

    def test_working_directory(self, tmp_path):
        lines = []
        with ProcessInvoker() as invoker:
            invoker.on_stdout(lines.append)
            invoker.execute(tmp_path, sys.executable, python_args("import os; print(os.getcwd())"))

        assert Path(lines[0]).resolve() == tmp_path.resolve()

    def test_environment_overrides(self, tmp_path):
        lines = []
        code = "import os; print(os.environ['PROCENV_TEST_VALUE'])"
        with ProcessInvoker() as invoker:
            invoker.on_stdout(lines.append)
            invoker.execute(tmp_path, sys.executable, python_args(code), environment={"PROCENV_TEST_VALUE": "x=1"})

        assert lines == ["x=1"]

    def test_missing_executable(self, tmp_path):
        with ProcessInvoker() as invoker:
            with pytest.raises(OSError):
                invoker.execute(tmp_path, str(tmp_path / "does-not-exist"), [])

    def test_executes_once(self, tmp_path):
        with ProcessInvoker() as invoker:
            invoker.execute(tmp_path, sys.executable, python_args("pass"))
            with pytest.raises(RuntimeError):
                invoker.execute(tmp_path, sys.executable, python_args("pass"))

    def test_cancel_event_terminates_child(self, tmp_path):
        cancel = threading.Event()
        timer = threading.Timer(0.2, cancel.set)
        timer.start()

        started = time.monotonic()
        with ProcessInvoker() as invoker:
            exit_code = invoker.execute(
                tmp_path, sys.executable, python_args("import time; time.sleep(30)"), cancel_event=cancel
            )

        assert exit_code != 0
        assert time.monotonic() - started < 10

    def test_context_exit_terminates_running_child(self, tmp_path):
        invoker = ProcessInvoker()
        errors = []

        def run():
            try:
                invoker.execute(tmp_path, sys.executable, python_args("import time; time.sleep(30)"))
            except Exception as e:
                errors.append(e)

        worker = threading.Thread(target=run, daemon=True)
        worker.start()
        deadline = time.monotonic() + 10
        while invoker.pid is None and time.monotonic() < deadline:
            time.sleep(0.01)

        invoker.close()
        worker.join(timeout=10)

        assert not worker.is_alive()
        assert errors == []
