"""Environment reader backed by `ps e` free-text output

ps prints the full command line followed by the environment, all joined
with spaces and with no escaping of '=' or ' ' inside values. The output
cannot be split into a reliable map, so only the requested variable is
searched for, as NAME=value.

Matching is a raw substring search: a name that also appears inside an
argument or as a prefix of another variable matches there first. Names
or values containing spaces are not supported.
"""
from typing import Optional
from environment.context import HostContext
from .base import EnvironmentReader, LookupResult


def extract_variable(text: str, variable: str) -> Optional[str]:
    """Extract the value following the first occurrence of variable in text

    The character right after the match is taken as the '=' separator. The
    value runs to the next space, or to the end of text when none follows.
    A match at the very end of text, with no separator after it, is not a
    variable.
    """
    start = text.find(variable)
    if start < 0:
        return None

    value_start = start + len(variable) + 1
    if value_start > len(text):
        return None

    remainder = text[value_start:]
    end = remainder.find(" ")
    if end > 0:
        return remainder[:end]
    # A leading space means an empty value
    if end == 0:
        return ""
    return remainder


class PsReader(EnvironmentReader):
    """Reads a single variable from the `ps e -p <pid> -o command` dump"""

    def __init__(self, host_context: HostContext):
        super().__init__("ps", host_context)
        self.command = host_context.ps_command

    def lookup(self, pid: int, variable: str) -> LookupResult:
        arguments = ["e", "-p", str(pid), "-o", "command"]
        self.logger.info(f"Read env from output of `{self.command} {' '.join(arguments)}`")

        exit_code, capture = self.run_capture(self.command, arguments)
        if exit_code is None:
            return self._create_command_failed_result(f"{self.command} could not be started")
        if exit_code != 0:
            self.logger.info(f"{self.command} exited with code {exit_code}", pid=pid)
            return self._create_command_failed_result(f"{self.command} exited with code {exit_code}")

        self.logger.info(f"Successfully dump environment variables for {pid}")
        if not len(capture):
            return self._create_not_found_result("ps produced no output")

        output = capture.joined()
        self.logger.debug(f"ps output: '{output}'")

        value = extract_variable(output, variable)
        if value is None:
            return self._create_not_found_result()

        self.logger.debug(f"PID:{pid} ({variable}={value})")
        return self._create_found_result(value)
