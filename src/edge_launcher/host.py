"""HostLauncher Protocol: what the host's base-launcher decorator provides.

The test runner owns temp-dir allocation, the generic spawn/kill hooks and
the event contract. ``base_browser_decorator(launcher)`` attaches these
members to the launcher instance before any Edge-specific setup runs.
"""
from typing import Any, Callable, Protocol, Sequence, runtime_checkable


@runtime_checkable
class HostLauncher(Protocol):
    """Members the host attaches to every launcher instance."""

    _temp_dir: str          # per-launch scratch directory
    _process: Any           # handle of the last process spawned by _exec_command

    def _exec_command(self, command: str, args: Sequence[str]) -> None:
        """Spawn *command* with *args* and store the handle in ``_process``."""
        ...

    def _get_command(self) -> str:
        """Command to run: the ENV_CMD override if set, else DEFAULT_CMD for this OS."""
        ...

    def on(self, event: str, handler: Callable) -> None:
        """Subscribe to a lifecycle event. ``kill`` handlers receive a done callback."""
        ...
