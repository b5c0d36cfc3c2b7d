"""Thread-safe capture of diagnostic command output"""
import threading
from typing import List, Optional
import structlog


class OutputCapture:
    """Collects non-empty stdout lines and logs non-empty stderr lines

    Both callbacks may be invoked concurrently from the invoker's reader
    threads; a single lock serializes appends and stderr logging.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger):
        self._logger = logger
        self._lock = threading.Lock()
        self._lines: List[str] = []

    def append_stdout(self, line: Optional[str]) -> None:
        if line:
            with self._lock:
                self._lines.append(line)

    def log_stderr(self, line: Optional[str]) -> None:
        if line:
            with self._lock:
                self._logger.error(line)

    @property
    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    @property
    def first_line(self) -> Optional[str]:
        with self._lock:
            return self._lines[0] if self._lines else None

    def joined(self) -> str:
        """All captured lines joined with a single space"""
        with self._lock:
            return " ".join(self._lines)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)
