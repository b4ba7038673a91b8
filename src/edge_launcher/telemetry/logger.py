"""Structured JSONL event logging for launches."""
import json
import logging
import os
import time
import uuid

log = logging.getLogger(__name__)


class LaunchEventLogger:
    """Writes one JSON line per launch event to a per-launcher JSONL file.

    All logging is best-effort — methods never raise exceptions.
    Supports context-manager protocol for automatic close.
    """

    def __init__(self, launcher: str, log_dir: str, run_id: str | None = None):
        self._launcher = launcher
        self._run_id = run_id or uuid.uuid4().hex[:12]
        self._f = None
        try:
            os.makedirs(log_dir, exist_ok=True)
            path = os.path.join(log_dir, f"{launcher}_{self._run_id}.jsonl")
            self._f = open(path, "a", encoding="utf-8")
        except Exception as e:
            log.warning(f"LaunchEventLogger: failed to open log file: {e}")

    @property
    def run_id(self) -> str:
        return self._run_id

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _write(self, event: dict):
        if self._f is None:
            return
        try:
            event["ts"] = time.time()
            event["run_id"] = self._run_id
            event["launcher"] = self._launcher
            self._f.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._f.flush()
        except Exception as e:
            log.warning(f"LaunchEventLogger: write failed: {e}")

    def log_launch_start(self, url: str, mode: str, command: str, flags: list[str]):
        """``mode`` is ``native`` or ``bridged``."""
        self._write({
            "event": "launch_start",
            "url": url,
            "mode": mode,
            "command": command,
            "flags": flags,
        })

    def log_launch_failed(self, mode: str, signal: str, error: str):
        self._write({
            "event": "launch_failed",
            "mode": mode,
            "signal": signal,
            "error": error,
        })

    def log_pid_recovered(self, pid: int):
        self._write({"event": "pid_recovered", "pid": pid})

    def log_kill(self, pid: int | None, mode: str | None, ok: bool):
        self._write({
            "event": "kill",
            "pid": pid,
            "mode": mode,
            "ok": ok,
        })

    def close(self):
        if self._f is not None:
            try:
                self._f.flush()
                self._f.close()
            except Exception:
                pass
            self._f = None
