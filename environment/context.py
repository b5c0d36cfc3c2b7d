"""Host context shared by environment readers"""
from pathlib import Path
from typing import Optional
import structlog
from config import Config
from logging_config import get_logger
from utils.process_invoker import ProcessInvoker
from .detection import PlatformFamily, detect_platform


class HostContext:
    """Supplies configuration, logging and subprocess services to readers"""

    def __init__(self, config: Optional[Config] = None,
                 platform: Optional[PlatformFamily] = None):
        self.config = config or Config()
        self._platform = platform

    @property
    def platform(self) -> PlatformFamily:
        """Platform family of the host, honouring the configured override"""
        if self._platform is not None:
            return self._platform
        if self.config.platform_override:
            return PlatformFamily(self.config.platform_override)
        return detect_platform()

    def force_platform(self, platform: Optional[PlatformFamily]) -> None:
        """Force a specific platform family (for testing/override)"""
        self._platform = platform

    @property
    def root_directory(self) -> Path:
        return self.config.root_directory

    @property
    def procstat_command(self) -> str:
        return self.config.procstat_command

    @property
    def ps_command(self) -> str:
        return self.config.ps_command

    def get_logger(self, name: str) -> structlog.stdlib.BoundLogger:
        return get_logger(name)

    def create_process_invoker(self) -> ProcessInvoker:
        """Create a fresh subprocess invoker; callers own and dispose it"""
        return ProcessInvoker()
