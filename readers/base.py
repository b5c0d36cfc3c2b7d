"""Base reader interface for foreign process environment lookups"""
import abc
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple
from environment.context import HostContext
from .capture import OutputCapture


class LookupStatus(Enum):
    """Outcome of a single environment variable lookup"""
    FOUND = "found"
    NOT_FOUND = "not_found"
    COMMAND_FAILED = "command_failed"
    PARSE_ERROR = "parse_error"


@dataclass
class LookupResult:
    """Result of an environment variable lookup"""
    status: LookupStatus
    value: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    method: Optional[str] = None

    @property
    def is_found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @property
    def value_or_none(self) -> Optional[str]:
        """Collapse every non-FOUND outcome to None"""
        return self.value if self.is_found else None


class EnvironmentReader(abc.ABC):
    """Abstract base class for platform-specific environment readers"""

    # Diagnostic command run by this reader, None for in-process readers
    command: Optional[str] = None

    def __init__(self, name: str, host_context: HostContext):
        self.name = name
        self.host_context = host_context
        self.logger = host_context.get_logger(f"readers.{name}")

    @abc.abstractmethod
    def lookup(self, pid: int, variable: str) -> LookupResult:
        """Look up one variable in the environment of process pid"""
        pass

    def run_capture(self, file_name: str, arguments: Sequence[str]) -> Tuple[Optional[int], OutputCapture]:
        """Run a diagnostic command and capture its output

        Returns (exit_code, capture). exit_code is None when the command
        could not be started at all.
        """
        capture = OutputCapture(self.logger)
        with self.host_context.create_process_invoker() as invoker:
            invoker.on_stdout(capture.append_stdout)
            invoker.on_stderr(capture.log_stderr)
            try:
                exit_code = invoker.execute(
                    working_directory=self.host_context.root_directory,
                    file_name=file_name,
                    arguments=arguments,
                    environment=None,
                    cancel_event=None
                )
            except OSError as e:
                self.logger.error("Could not start diagnostic command", command=file_name, error=str(e))
                return None, capture
        return exit_code, capture

    def _create_found_result(self, value: str) -> LookupResult:
        return LookupResult(status=LookupStatus.FOUND, value=value, method=self.name)

    def _create_not_found_result(self, reason: Optional[str] = None) -> LookupResult:
        return LookupResult(
            status=LookupStatus.NOT_FOUND,
            errors=[reason] if reason else [],
            method=self.name
        )

    def _create_command_failed_result(self, reason: str) -> LookupResult:
        return LookupResult(status=LookupStatus.COMMAND_FAILED, errors=[reason], method=self.name)

    def _create_parse_error_result(self, reason: str) -> LookupResult:
        return LookupResult(status=LookupStatus.PARSE_ERROR, errors=[reason], method=self.name)
