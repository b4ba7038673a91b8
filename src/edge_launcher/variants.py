"""The Edge release channels and their per-OS default commands."""
import enum
from dataclasses import dataclass

from .browser.environment import PlatformInfo
from .browser.paths import resolve_darwin_path, resolve_native_path, resolve_windows_path
from .browser.wsl import resolve_bridged_path


class FlagStrategy(enum.Flag):
    BASE = 0
    HEADLESS = enum.auto()
    CANARY = enum.auto()


@dataclass(frozen=True)
class BrowserVariant:
    name: str
    linux_bins: tuple[str, ...]
    darwin_path: str
    install_dirs: tuple[str, ...]   # Windows folder names under Microsoft\
    env_cmd: str
    strategy: FlagStrategy = FlagStrategy.BASE

    @property
    def headless(self) -> bool:
        return FlagStrategy.HEADLESS in self.strategy

    @property
    def canary(self) -> bool:
        return FlagStrategy.CANARY in self.strategy


@dataclass(frozen=True)
class DefaultCommands:
    linux: str | None = None
    darwin: str | None = None
    win32: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {"linux": self.linux, "darwin": self.darwin, "win32": self.win32}


def build_default_commands(variant: BrowserVariant, info: PlatformInfo) -> DefaultCommands:
    """Probe the default command of *variant* for every OS key.

    Under WSL the ``win32`` entry points at the Windows-side install.
    """
    if info.is_wsl:
        win32 = resolve_bridged_path(*variant.install_dirs, info=info)
    else:
        win32 = resolve_windows_path(variant.install_dirs[0], info)
    return DefaultCommands(
        linux=resolve_native_path(variant.linux_bins, info),
        darwin=resolve_darwin_path(variant.darwin_path, info),
        win32=win32,
    )


def _app(bundle: str) -> str:
    return f"/Applications/{bundle}.app/Contents/MacOS/{bundle}"


_STABLE = dict(
    linux_bins=("msedge", "microsoft-edge", "microsoft-edge-stable"),
    darwin_path=_app("Microsoft Edge"),
    install_dirs=("Edge",),
    env_cmd="EDGE_BIN",
)
_BETA = dict(
    linux_bins=("msedge-beta", "microsoft-edge-beta"),
    darwin_path=_app("Microsoft Edge Beta"),
    install_dirs=("Edge Beta",),
    env_cmd="EDGE_BETA_BIN",
)
_DEV = dict(
    linux_bins=("msedge-dev", "microsoft-edge-dev"),
    darwin_path=_app("Microsoft Edge Dev"),
    install_dirs=("Edge Dev",),
    env_cmd="EDGE_DEV_BIN",
)
_CANARY = dict(
    linux_bins=("Edge SxS",),
    darwin_path=_app("Microsoft Edge Canary"),
    install_dirs=("Edge SxS",),
    env_cmd="EDGE_CANARY_BIN",
)

_H = FlagStrategy.HEADLESS
_C = FlagStrategy.CANARY

VARIANTS: tuple[BrowserVariant, ...] = (
    BrowserVariant("Edge", **_STABLE),
    BrowserVariant("EdgeHeadless", strategy=_H, **_STABLE),
    BrowserVariant("EdgeBeta", **_BETA),
    BrowserVariant("EdgeBetaHeadless", strategy=_H, **_BETA),
    BrowserVariant("EdgeDev", **_DEV),
    BrowserVariant("EdgeDevHeadless", strategy=_H, **_DEV),
    BrowserVariant("EdgeCanary", strategy=_C, **_CANARY),
    BrowserVariant("EdgeCanaryHeadless", strategy=_C | _H, **_CANARY),
)

VARIANTS_BY_NAME = {v.name: v for v in VARIANTS}
