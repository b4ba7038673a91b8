"""edge-launcher — Microsoft Edge launcher plugin for test runners.

Finds Edge on Linux, macOS, Windows and from inside WSL, builds its command
line per release channel (stable, beta, dev, canary, each optionally
headless), starts it at a URL and kills it again.

The host calls ``build_plugin(probe_platform())`` once and registers the
returned ``launcher:<Name>`` entries with its injector.
"""
from .browser.environment import PlatformInfo, probe_platform  # noqa: F401
from .browser.flags import (  # noqa: F401
    is_js_flags,
    sanitize_js_flags,
    build_headless_flags,
    build_canary_flags,
)
from .engine.launcher import EdgeLauncher  # noqa: F401
from .errors import LaunchSignal, LauncherError  # noqa: F401
from .plugin import build_plugin, launcher_type  # noqa: F401
from .variants import VARIANTS, BrowserVariant, FlagStrategy  # noqa: F401
