"""Tests for the variant registry and the host plugin mapping."""
from edge_launcher.browser import paths, wsl
from edge_launcher.browser.environment import PlatformInfo
from edge_launcher.engine.launcher import EdgeLauncher
from edge_launcher.plugin import build_plugin
from edge_launcher.variants import VARIANTS, VARIANTS_BY_NAME, FlagStrategy, build_default_commands

EXPECTED = {
    "Edge": ("EDGE_BIN", FlagStrategy.BASE),
    "EdgeHeadless": ("EDGE_BIN", FlagStrategy.HEADLESS),
    "EdgeBeta": ("EDGE_BETA_BIN", FlagStrategy.BASE),
    "EdgeBetaHeadless": ("EDGE_BETA_BIN", FlagStrategy.HEADLESS),
    "EdgeDev": ("EDGE_DEV_BIN", FlagStrategy.BASE),
    "EdgeDevHeadless": ("EDGE_DEV_BIN", FlagStrategy.HEADLESS),
    "EdgeCanary": ("EDGE_CANARY_BIN", FlagStrategy.CANARY),
    "EdgeCanaryHeadless": ("EDGE_CANARY_BIN", FlagStrategy.CANARY | FlagStrategy.HEADLESS),
}

DARWIN = PlatformInfo(system="darwin", home="/nonexistent-home")


def _decorator(launcher):
    launcher._temp_dir = "/tmp/x"
    launcher._process = None
    launcher.on = lambda event, handler: None


def test_variant_table():
    assert {v.name: (v.env_cmd, v.strategy) for v in VARIANTS} == EXPECTED


def test_variant_strategy_helpers():
    canary_headless = VARIANTS_BY_NAME["EdgeCanaryHeadless"]
    assert canary_headless.canary and canary_headless.headless
    edge = VARIANTS_BY_NAME["Edge"]
    assert not edge.canary and not edge.headless


def test_plugin_keys_and_shape():
    plugin = build_plugin(DARWIN)
    assert set(plugin) == {f"launcher:{name}" for name in EXPECTED}
    for key, (kind, factory) in plugin.items():
        assert kind == "type"
        assert factory.inject == ["base_browser_decorator", "args"]
        assert factory.__name__ == key.split(":", 1)[1] + "Browser"


def test_factory_builds_launcher():
    _, factory = build_plugin(DARWIN)["launcher:EdgeDevHeadless"]
    launcher = factory(_decorator, {"flags": ["--lang=en"]})
    assert isinstance(launcher, EdgeLauncher)
    assert launcher.name == "EdgeDevHeadless"
    assert launcher.ENV_CMD == "EDGE_DEV_BIN"
    assert launcher.DEFAULT_CMD == {
        "linux": None,
        "darwin": "/Applications/Microsoft Edge Dev.app/Contents/MacOS/Microsoft Edge Dev",
        "win32": None,
    }
    assert "--lang=en" in launcher._get_options()


def test_factories_share_default_commands_not_state():
    _, factory = build_plugin(DARWIN)["launcher:Edge"]
    a = factory(_decorator, {"flags": ["--a"]})
    b = factory(_decorator, {})
    assert a.DEFAULT_CMD == b.DEFAULT_CMD
    assert "--a" not in b._get_options()


def test_default_commands_windows(monkeypatch):
    monkeypatch.setattr(paths, "_exists", lambda p: False)
    info = PlatformInfo(system="win32", env={"PROGRAMFILES": "C:\\Program Files"})
    commands = build_default_commands(VARIANTS_BY_NAME["EdgeCanary"], info)
    assert commands.win32 == "C:\\Program Files\\Microsoft\\Edge SxS\\Application\\msedge.exe"
    assert commands.linux is None
    assert commands.darwin is None


def test_default_commands_wsl(monkeypatch):
    monkeypatch.setattr(wsl, "_exists", lambda p: False)
    info = PlatformInfo(system="linux", is_wsl=True, env={"PATH": ""})
    commands = build_default_commands(VARIANTS_BY_NAME["EdgeBeta"], info)
    assert commands.win32 == "/mnt/c/Program Files/Microsoft/Edge Beta/Application/msedge.exe"
    assert commands.linux is None
    assert commands.darwin is None
