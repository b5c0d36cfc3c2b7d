"""Entry point that routes a lookup to the reader for the host platform"""
import time
from typing import Any, Dict, Optional, Type
from environment.context import HostContext
from environment.detection import PlatformFamily
from errors import UnsupportedPlatformError, UsageError
from logging_config import get_logger, log_lookup
from .base import EnvironmentReader, LookupResult
from .native import NativeReader
from .procstat import ProcstatReader
from .ps import PsReader

logger = get_logger(__name__)

READERS: Dict[PlatformFamily, Type[EnvironmentReader]] = {
    PlatformFamily.LINUX: ProcstatReader,
    PlatformFamily.OSX: PsReader,
    PlatformFamily.WINDOWS: NativeReader,
}


def get_reader(host_context: HostContext, platform: Optional[PlatformFamily] = None) -> EnvironmentReader:
    """Instantiate the reader registered for platform (host platform by default)"""
    platform = platform or host_context.platform
    reader_class = READERS.get(platform)
    if reader_class is None:
        raise UnsupportedPlatformError(platform)
    return reader_class(host_context)


def _resolve_pid(process: Any) -> int:
    """Accept an int pid, a psutil.Process or anything with a pid attribute"""
    pid = process if isinstance(process, int) else getattr(process, "pid", None)
    if isinstance(pid, bool) or not isinstance(pid, int) or pid <= 0:
        raise UsageError("process", f"must be a positive pid or expose one, got {process!r}")
    return pid


def lookup_environment_variable(process: Any, host_context: HostContext, variable: str) -> LookupResult:
    """Look up variable in the environment of a foreign process

    Returns the reader's LookupResult. Raises UsageError for missing
    arguments and UnsupportedPlatformError when the host platform has no
    reader; every other failure is reported through the result.
    """
    if process is None:
        raise UsageError("process")
    if host_context is None:
        raise UsageError("host_context")
    if variable is None:
        raise UsageError("variable")
    if variable == "":
        raise UsageError("variable", "must not be empty")

    pid = _resolve_pid(process)
    reader = get_reader(host_context)

    started = time.monotonic()
    result = reader.lookup(pid, variable)
    log_lookup(logger, pid, variable, reader.name, result.status.value, time.monotonic() - started)
    return result


def get_environment_variable(process: Any, host_context: HostContext, variable: str) -> Optional[str]:
    """Value of variable in the environment of process, or None if it cannot be determined"""
    return lookup_environment_variable(process, host_context, variable).value_or_none
