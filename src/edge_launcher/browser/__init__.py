"""browser — Edge discovery and command-line construction.

Pure path and flag logic plus the WSL drive/mount translation; nothing here
starts the browser.
"""
from .environment import PlatformInfo, probe_platform, detect_wsl  # noqa: F401
from .paths import resolve_native_path, resolve_windows_path, resolve_darwin_path  # noqa: F401
from .wsl import wslpath, list_windows_drive_roots, program_files_prefixes, resolve_bridged_path  # noqa: F401
from .flags import (  # noqa: F401
    DEFAULT_FLAGS,
    is_js_flags,
    sanitize_js_flags,
    build_base_flags,
    build_headless_flags,
    build_canary_flags,
)
