"""Environment reader using the operating system's native process API"""
import psutil
from environment.context import HostContext
from .base import EnvironmentReader, LookupResult


class NativeReader(EnvironmentReader):
    """Reads the environment block through psutil without spawning a command"""

    def __init__(self, host_context: HostContext):
        super().__init__("native", host_context)

    def lookup(self, pid: int, variable: str) -> LookupResult:
        self.logger.info(f"Read env of process {pid} through the native process API")
        try:
            env = psutil.Process(pid).environ()
        except psutil.Error as e:
            self.logger.error("Could not read process environment", pid=pid, error=str(e))
            return self._create_command_failed_result(f"Could not read environment of {pid}: {e}")

        if variable in env:
            self.logger.debug(f"PID:{pid} ({variable}={env[variable]})")
            return self._create_found_result(env[variable])
        return self._create_not_found_result()
