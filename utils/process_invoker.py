"""Subprocess execution with line-by-line output callbacks"""
import logging
import os
import signal
import subprocess
import sys
import threading
from pathlib import Path
from typing import Callable, Dict, IO, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

LineCallback = Callable[[str], None]

GRACEFUL_TIMEOUT: float = 2.0
CANCEL_POLL_INTERVAL: float = 0.1


class ProcessInvoker:
    """Runs one command and streams its stdout/stderr lines to callbacks

    Lines are delivered from reader threads, so callbacks must be
    thread-safe. Every line has been delivered by the time execute()
    returns. Use as a context manager so the child is always cleaned up.
    """

    def __init__(self):
        self._stdout_callbacks: List[LineCallback] = []
        self._stderr_callbacks: List[LineCallback] = []
        self._process: Optional[subprocess.Popen] = None

    def on_stdout(self, callback: LineCallback) -> None:
        self._stdout_callbacks.append(callback)

    def on_stderr(self, callback: LineCallback) -> None:
        self._stderr_callbacks.append(callback)

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process else None

    def execute(self, working_directory: Union[str, Path], file_name: str,
                arguments: Sequence[str], environment: Optional[Dict[str, str]] = None,
                cancel_event: Optional[threading.Event] = None) -> int:
        """Run file_name with arguments and return its exit code

        environment entries are merged over the current environment; None
        inherits it unchanged. Without a cancel_event the wait is unbounded.
        Raises OSError when the executable cannot be started.
        """
        if self._process is not None:
            raise RuntimeError("ProcessInvoker can only execute once")

        env = None
        if environment:
            env = os.environ.copy()
            env.update(environment)

        command = [file_name, *arguments]
        logger.debug(f"Starting process: {' '.join(command)} (cwd={working_directory})")

        self._process = subprocess.Popen(
            command,
            cwd=str(working_directory),
            env=env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )

        readers = [
            threading.Thread(
                target=self._pump, args=(self._process.stdout, self._stdout_callbacks),
                name=f"stdout-{self._process.pid}", daemon=True
            ),
            threading.Thread(
                target=self._pump, args=(self._process.stderr, self._stderr_callbacks),
                name=f"stderr-{self._process.pid}", daemon=True
            ),
        ]
        for reader in readers:
            reader.start()

        if cancel_event is None:
            exit_code = self._process.wait()
        else:
            exit_code = self._wait_cancellable(cancel_event)

        # Drain both pipes before reporting completion
        for reader in readers:
            reader.join()

        logger.debug(f"Process {self._process.pid} exited with code {exit_code}")
        return exit_code

    def _wait_cancellable(self, cancel_event: threading.Event) -> int:
        while True:
            try:
                return self._process.wait(timeout=CANCEL_POLL_INTERVAL)
            except subprocess.TimeoutExpired:
                if cancel_event.is_set():
                    logger.info(f"Cancelling process {self._process.pid}")
                    self.terminate()
                    return self._process.wait()

    @staticmethod
    def _pump(stream: IO[str], callbacks: List[LineCallback]) -> None:
        try:
            for line in stream:
                line = line.rstrip("\r\n")
                for callback in callbacks:
                    callback(line)
        finally:
            stream.close()

    def terminate(self, graceful_timeout: float = GRACEFUL_TIMEOUT) -> None:
        """Terminate the child if it is still running: SIGTERM, wait, SIGKILL"""
        process = self._process
        if process is None or process.poll() is not None:
            return

        try:
            if sys.platform == "win32":
                process.terminate()
            else:
                process.send_signal(signal.SIGTERM)
            logger.debug(f"Sent SIGTERM to process {process.pid}")
        except ProcessLookupError:
            return

        try:
            process.wait(timeout=graceful_timeout)
            return
        except subprocess.TimeoutExpired:
            pass

        try:
            process.kill()
            logger.debug(f"Sent SIGKILL to process {process.pid}")
        except ProcessLookupError:
            return
        process.wait()

    def close(self) -> None:
        self.terminate()

    def __enter__(self) -> "ProcessInvoker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
