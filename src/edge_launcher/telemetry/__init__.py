"""telemetry — structured launch event logging."""
from .logger import LaunchEventLogger  # noqa: F401
