"""Normalized error signals for the launcher.

Internal failures are mapped into these signals so the lifecycle hooks can
log them uniformly before absorbing them at the start/kill boundary.
"""
from enum import Enum


class LaunchSignal(Enum):
    """Kinds of launch failure. None of them is fatal to the host."""
    EXECUTABLE_NOT_FOUND = "executable_not_found"  # no binary resolved
    TRANSLATION_FAILURE = "translation_failure"    # wslpath failed
    SPAWN_FAILURE = "spawn_failure"                # OS refused to start the process
    PID_RECOVERY_FAILURE = "pid_recovery_failure"  # sentinel never seen
    KILL_FAILURE = "kill_failure"                  # process already gone


class LauncherError(Exception):
    """Exception carrying a normalized LaunchSignal."""

    def __init__(self, signal: LaunchSignal, message: str = ""):
        self.signal = signal
        super().__init__(message or signal.value)
