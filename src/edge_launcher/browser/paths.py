"""Per-OS discovery of the Edge executable.

Each resolver is only active on its own OS and returns None everywhere else.
"""
import logging
import ntpath
import os
import shutil

from .environment import PlatformInfo

log = logging.getLogger(__name__)

EXECUTABLE = "msedge.exe"
WINDOWS_PREFIX_VARS = ("LOCALAPPDATA", "PROGRAMFILES", "PROGRAMFILES(X86)")


def _exists(path: str) -> bool:
    return os.path.exists(path)


def resolve_native_path(candidates, info: PlatformInfo) -> str | None:
    """Return the first candidate command found on PATH (Linux only)."""
    if info.system != "linux":
        return None
    search_path = info.env.get("PATH")
    for candidate in candidates:
        try:
            if shutil.which(candidate, path=search_path):
                return candidate
        except OSError as e:
            log.debug("which(%s) failed: %s", candidate, e)
    return None


def resolve_windows_path(install_dir_name: str, info: PlatformInfo) -> str | None:
    """Probe the Windows install prefixes for msedge.exe (native Windows only).

    When no probe exists on disk the last computed candidate is returned
    unverified, so the spawn itself reports the missing file.
    """
    if info.system != "win32":
        return None
    suffix = f"Microsoft\\{install_dir_name}\\Application\\{EXECUTABLE}"
    candidate = None
    for var in WINDOWS_PREFIX_VARS:
        prefix = info.env.get(var)
        if not prefix:
            continue
        candidate = ntpath.join(prefix, suffix)
        if _exists(candidate):
            return candidate
    return candidate


def resolve_darwin_path(default_path: str, info: PlatformInfo) -> str | None:
    """Prefer ``~/Applications/...`` over the system-wide bundle (macOS only)."""
    if info.system != "darwin":
        return None
    home_path = info.home.rstrip("/") + default_path
    if info.home and _exists(home_path):
        return home_path
    return default_path
