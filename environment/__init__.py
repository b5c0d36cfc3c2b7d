"""Platform detection and host context for process environment lookups"""
from .detection import PlatformFamily, detect_platform
from .context import HostContext

__all__ = [
    'PlatformFamily',
    'detect_platform',
    'HostContext'
]
