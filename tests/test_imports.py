"""Smoke tests: public surface is importable."""


def test_package_imports():
    from edge_launcher import (
        build_plugin,
        probe_platform,
        is_js_flags,
        sanitize_js_flags,
        build_headless_flags,
        build_canary_flags,
        EdgeLauncher,
        LauncherError,
    )
    assert callable(build_plugin)
    assert callable(probe_platform)
    assert callable(is_js_flags)
    assert callable(sanitize_js_flags)
    assert callable(build_headless_flags)
    assert callable(build_canary_flags)
    assert callable(EdgeLauncher)
    assert issubclass(LauncherError, Exception)


def test_browser_imports():
    from edge_launcher.browser import (
        resolve_native_path,
        resolve_windows_path,
        resolve_darwin_path,
        resolve_bridged_path,
        list_windows_drive_roots,
    )
    assert callable(resolve_native_path)
    assert callable(resolve_windows_path)
    assert callable(resolve_darwin_path)
    assert callable(resolve_bridged_path)
    assert callable(list_windows_drive_roots)


def test_engine_imports():
    from edge_launcher.engine import PidWatcher, spawn_bridged, PID_MARKER
    assert callable(PidWatcher)
    assert callable(spawn_bridged)
    assert PID_MARKER == "BROWSERBROWSERBROWSERBROWSER"


def test_telemetry_imports():
    from edge_launcher.telemetry import LaunchEventLogger
    assert callable(LaunchEventLogger)
