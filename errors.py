"""Exception hierarchy for process environment lookups"""


class ProcessEnvError(Exception):
    """Base class for all process environment errors"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UsageError(ProcessEnvError, ValueError):
    """Raised when a required argument is missing or empty"""

    def __init__(self, argument: str, reason: str = "must not be None"):
        self.argument = argument
        self.reason = reason
        super().__init__(f"Argument '{argument}' {reason}")


class UnsupportedPlatformError(ProcessEnvError, NotImplementedError):
    """Raised when no reader exists for the host platform"""

    def __init__(self, platform):
        self.platform = platform
        name = getattr(platform, "value", platform)
        super().__init__(f"Cannot look up environment variables on {name}")


class ProcstatFormatError(ProcessEnvError, ValueError):
    """Raised when procstat JSON output does not have the expected shape"""
