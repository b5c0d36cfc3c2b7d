"""Platform family detection for selecting an environment reader"""
import logging
import sys
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class PlatformFamily(Enum):
    """Operating system families with distinct lookup strategies"""
    LINUX = "linux"
    OSX = "osx"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


# sys.platform prefixes, checked in order
_PLATFORM_PREFIXES = (
    ("linux", PlatformFamily.LINUX),
    ("freebsd", PlatformFamily.LINUX),
    ("darwin", PlatformFamily.OSX),
    ("win32", PlatformFamily.WINDOWS),
    ("cygwin", PlatformFamily.WINDOWS),
)


def detect_platform(sys_platform: Optional[str] = None) -> PlatformFamily:
    """Map a sys.platform string to a PlatformFamily"""
    value = sys_platform if sys_platform is not None else sys.platform
    for prefix, family in _PLATFORM_PREFIXES:
        if value.startswith(prefix):
            return family

    logger.warning(f"Unrecognized platform: {value}")
    return PlatformFamily.UNKNOWN
