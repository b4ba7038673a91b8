"""Per-launcher arguments as supplied by the host's configuration.

The host passes a plain mapping (``flags``, ``edgeDataDir``, ``eventLogDir``);
it is copied here and never mutated.
"""
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class LauncherArgs:
    flags: tuple[str, ...] = ()
    edge_data_dir: str | None = None
    event_log_dir: str | None = None

    @classmethod
    def from_mapping(cls, args: Mapping[str, Any] | None) -> "LauncherArgs":
        args = args or {}
        flags = args.get("flags") or ()
        if isinstance(flags, str):
            flags = (flags,)
        return cls(
            flags=tuple(str(f) for f in flags),
            edge_data_dir=args.get("edgeDataDir") or None,
            event_log_dir=args.get("eventLogDir") or None,
        )
