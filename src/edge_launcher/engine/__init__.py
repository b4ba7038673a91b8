"""engine — process launch, PID recovery and the start/kill lifecycle."""
from .pid import PidWatcher, PID_MARKER, build_bridge_script, spawn_bridged  # noqa: F401
from .launcher import EdgeLauncher, call_soon  # noqa: F401
