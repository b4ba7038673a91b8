"""Host plugin mapping: ``launcher:<Name>`` -> ``("type", factory)``.

The host's injector calls each factory with the dependencies named in its
``inject`` list.
"""
import logging

from .browser.environment import PlatformInfo, probe_platform
from .engine.launcher import EdgeLauncher
from .variants import VARIANTS, BrowserVariant, build_default_commands

log = logging.getLogger(__name__)


def launcher_type(variant: BrowserVariant, info: PlatformInfo):
    """Factory building an EdgeLauncher for *variant*.

    Default commands are probed here, once per variant, not per launch.
    """
    default_cmd = build_default_commands(variant, info)
    log.debug("%s default commands: %s", variant.name, default_cmd)

    def factory(base_browser_decorator, args):
        return EdgeLauncher(
            base_browser_decorator, args,
            variant=variant, info=info, default_cmd=default_cmd,
        )

    factory.__name__ = factory.__qualname__ = f"{variant.name}Browser"
    factory.inject = list(EdgeLauncher.inject)
    factory.variant = variant
    return factory


def build_plugin(info: PlatformInfo | None = None, variants=VARIANTS) -> dict[str, tuple]:
    """Build the registration mapping, probing the platform if *info* is None."""
    info = info or probe_platform()
    return {f"launcher:{v.name}": ("type", launcher_type(v, info)) for v in variants}
