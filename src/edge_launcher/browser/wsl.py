"""WSL bridge: find the Windows-side Edge install from inside a WSL guest.

Windows drives can be mounted anywhere (``/mnt/c``, ``/c``, ...) depending on
``wsl.conf``, so the mount points are recovered by translating PATH entries
with ``wslpath`` rather than assuming ``/mnt``.
"""
import logging
import os
import posixpath
import re
import subprocess

from ..errors import LaunchSignal, LauncherError
from .environment import PlatformInfo
from .paths import EXECUTABLE

log = logging.getLogger(__name__)

_DRIVE_RE = re.compile(r"^([A-Z]):\\", re.IGNORECASE)

# WSL does not forward PROGRAMFILES, so the folder names are fixed.
PROGRAM_FILES_DIRS = ("Program Files", "Program Files (x86)")
FALLBACK_PREFIX = "/mnt/c/Program Files/"


def _exists(path: str) -> bool:
    return os.path.exists(path)


def wslpath(path: str, windows: bool = True) -> str:
    """Translate *path* between Linux and Windows form.

    ``windows=True`` gives the Windows path of a Linux path, ``False`` the
    Linux mount path of a Windows path.
    """
    argv = ["wslpath", "-w", path] if windows else ["wslpath", path]
    try:
        out = subprocess.check_output(argv, text=True, stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError) as e:
        raise LauncherError(LaunchSignal.TRANSLATION_FAILURE, f"wslpath {path!r}: {e}") from e
    return out.strip()


def list_windows_drive_roots(info: PlatformInfo) -> list[str]:
    """Drive letters reachable through the PATH entries, deduplicated in order."""
    drives: list[str] = []
    for entry in info.path_entries:
        if not _exists(entry):
            continue
        try:
            windows_path = wslpath(entry)
        except LauncherError as e:
            log.debug("Skipping PATH entry %s: %s", entry, e)
            continue
        m = _DRIVE_RE.match(windows_path)
        if m and m.group(1) not in drives:
            drives.append(m.group(1))
    return drives


def program_files_prefixes(drives) -> list[str]:
    """Linux mount paths of ``Program Files`` and ``Program Files (x86)`` per drive."""
    result = []
    for folder in PROGRAM_FILES_DIRS:
        for drive in drives:
            try:
                result.append(wslpath(f"{drive}:\\{folder}", windows=False))
            except LauncherError as e:
                log.debug("No mount path for %s:\\%s: %s", drive, folder, e)
    return result


def resolve_bridged_path(*install_dir_names: str, info: PlatformInfo) -> str | None:
    """Find msedge.exe on the Windows side, trying every install-dir name.

    Falls back to the conventional ``/mnt/c/Program Files`` location when
    nothing is found on disk.
    """
    if not info.is_wsl or not install_dir_names:
        return None
    prefixes = program_files_prefixes(list_windows_drive_roots(info))
    for prefix in prefixes:
        for name in install_dir_names:
            candidate = posixpath.join(prefix, "Microsoft", name, "Application", EXECUTABLE)
            if _exists(candidate):
                log.debug("Found Windows Edge at %s", candidate)
                return candidate
    return posixpath.join(FALLBACK_PREFIX, "Microsoft", install_dir_names[0], "Application", EXECUTABLE)
