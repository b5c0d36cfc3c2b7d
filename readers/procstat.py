"""Environment reader backed by procstat libxo JSON output"""
import json
from typing import Any, Dict
from environment.context import HostContext
from errors import ProcstatFormatError
from .base import EnvironmentReader, LookupResult


def _get_field(node: Any, key: str, path: str) -> Any:
    if not isinstance(node, dict):
        raise ProcstatFormatError(f"Expected an object at '{path}', got {type(node).__name__}")
    if key not in node:
        raise ProcstatFormatError(f"Missing field '{key}' at '{path}'")
    return node[key]


def parse_procstat_environment(output: str, pid: int) -> Dict[str, str]:
    """Parse `procstat -e --libxo json` output into an environment map

    Expected shape:
        {"procstat": {"environment": {"<pid>": {"environment": ["K=V", ...]}}}}

    Each entry is split on its first '='; later duplicates win. Raises
    ProcstatFormatError for malformed JSON or an unexpected shape.
    """
    try:
        document = json.loads(output)
    # ValueError covers JSONDecodeError and oversized integer literals
    except (ValueError, RecursionError) as e:
        raise ProcstatFormatError(f"Invalid procstat JSON: {e}") from e

    node = _get_field(document, "procstat", "$")
    node = _get_field(node, "environment", "$.procstat")
    node = _get_field(node, str(pid), "$.procstat.environment")
    entries = _get_field(node, "environment", f"$.procstat.environment.{pid}")
    if not isinstance(entries, list):
        raise ProcstatFormatError(f"Expected an array of environment entries, got {type(entries).__name__}")

    env = {}
    for entry in entries:
        if not isinstance(entry, str) or "=" not in entry:
            raise ProcstatFormatError(f"Malformed environment entry: {entry!r}")
        key, value = entry.split("=", 1)
        env[key] = value
    return env


class ProcstatReader(EnvironmentReader):
    """Reads a process environment from procstat's structured JSON dump"""

    def __init__(self, host_context: HostContext):
        super().__init__("procstat", host_context)
        self.command = host_context.procstat_command

    def lookup(self, pid: int, variable: str) -> LookupResult:
        arguments = ["-e", "--libxo", "json", str(pid)]
        self.logger.info(f"Read env from output of `{self.command} {' '.join(arguments)}`")

        exit_code, capture = self.run_capture(self.command, arguments)
        if exit_code is None:
            return self._create_command_failed_result(f"{self.command} could not be started")
        if exit_code != 0:
            self.logger.info(f"{self.command} exited with code {exit_code}", pid=pid)
            return self._create_command_failed_result(f"{self.command} exited with code {exit_code}")

        self.logger.info(f"Successfully dump environment variables for {pid}")
        first_line = capture.first_line
        if first_line is None or not first_line.startswith("{"):
            return self._create_not_found_result("procstat produced no JSON output")

        output = capture.joined()
        self.logger.debug(f"procstat output: '{output}'")

        try:
            env = parse_procstat_environment(output, pid)
        except ProcstatFormatError as e:
            self.logger.error("Could not parse procstat output", pid=pid, error=str(e))
            return self._create_parse_error_result(str(e))

        for key, value in env.items():
            self.logger.debug(f"PID:{pid} ({key}={value})")

        if variable in env:
            return self._create_found_result(env[variable])
        return self._create_not_found_result()
