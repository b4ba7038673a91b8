"""Platform snapshot used by every path and launch decision.

The host calls ``probe_platform()`` once and hands the result to
``build_plugin()``; nothing here is cached at import time, so tests can build
their own ``PlatformInfo`` instead of probing the real machine.
"""
import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformInfo:
    """Immutable view of the OS the launcher runs on."""
    system: str                 # "linux", "darwin", "win32", ...
    is_wsl: bool = False
    env: Mapping[str, str] = field(default_factory=dict)
    home: str = ""

    def __post_init__(self):
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    @property
    def path_entries(self) -> list[str]:
        """Directories on PATH, in order, empty entries dropped."""
        return [p for p in self.env.get("PATH", "").split(":") if p]


def _running_in_docker() -> bool:
    if os.path.exists("/.dockerenv"):
        return True
    try:
        with open("/proc/self/cgroup", "r", encoding="utf-8") as f:
            return "docker" in f.read()
    except OSError:
        return False


def detect_wsl(system: str | None = None) -> bool:
    """True when running as a Linux guest under the Windows Subsystem for Linux."""
    system = system or sys.platform
    if system != "linux":
        return False
    if "microsoft" in platform.release().lower():
        return not _running_in_docker()
    try:
        with open("/proc/version", "r", encoding="utf-8") as f:
            version_info = f.read().lower()
    except OSError:
        return False
    return "microsoft" in version_info and not _running_in_docker()


def probe_platform() -> PlatformInfo:
    """Probe the current machine. Re-runs every call."""
    system = sys.platform
    info = PlatformInfo(
        system=system,
        is_wsl=detect_wsl(system),
        env=dict(os.environ),
        home=os.path.expanduser("~"),
    )
    log.debug("Probed platform: system=%s wsl=%s", info.system, info.is_wsl)
    return info
