"""Platform-specific readers for foreign process environments"""
from .base import EnvironmentReader, LookupResult, LookupStatus
from .capture import OutputCapture
from .dispatcher import READERS, get_environment_variable, get_reader, lookup_environment_variable
from .native import NativeReader
from .procstat import ProcstatReader, parse_procstat_environment
from .ps import PsReader, extract_variable

__all__ = [
    'EnvironmentReader',
    'LookupResult',
    'LookupStatus',
    'OutputCapture',
    'READERS',
    'get_environment_variable',
    'get_reader',
    'lookup_environment_variable',
    'NativeReader',
    'ProcstatReader',
    'parse_procstat_environment',
    'PsReader',
    'extract_variable'
]
