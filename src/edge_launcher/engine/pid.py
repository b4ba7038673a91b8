"""Bridged spawn and side-channel PID recovery.

From inside WSL the Windows browser is started with ``wmic.exe process call
create``. The only place its Windows PID shows up is wmic's textual reply, so
a small bash script picks out the ``ProcessId = <n>;`` line and re-emits it on
stderr behind a sentinel marker, where ``PidWatcher`` picks it up.
"""
import codecs
import logging
import re
import shlex
import subprocess
import threading
from concurrent.futures import Future
from functools import partial

from ..errors import LaunchSignal, LauncherError

log = logging.getLogger(__name__)

PID_MARKER = "BROWSERBROWSERBROWSERBROWSER"
PID_RE = re.compile(PID_MARKER + r"\s+debug me @ (\d+)")

_READ_SIZE = 4096

_BRIDGE_SCRIPT = """
processString=$(wmic.exe process call create {command_line});

while IFS= read -r line; do
  if [[ $line == *"ProcessId = "* ]]; then
    removePrefix=${{line#*ProcessId = }}
    removeSuffix=${{removePrefix%;*}}
    pid=$removeSuffix

    echo >&2 "{marker} debug me @ $pid"
    exit 0
  fi
done < <(printf '%s\\n' "$processString")
exit 0;
"""


class PidWatcher:
    """Incrementally decodes a byte stream and records the announced PID.

    Only complete lines are matched, so a PID split across two chunks is
    never read short. The trailing partial line is matched on ``close()``.
    """

    def __init__(self, on_pid=None, expect_pid: bool = True):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
        self._on_pid = on_pid
        self._expect_pid = expect_pid
        self.pid: int | None = None
        self.future: Future = Future()

    def feed(self, chunk) -> int | None:
        """Consume one chunk (bytes or str). Returns the PID once known."""
        if self.pid is not None:
            return self.pid
        text = chunk if isinstance(chunk, str) else self._decoder.decode(chunk)
        self._pending += text
        *lines, self._pending = self._pending.split("\n")
        for line in lines:
            if self._match(line):
                break
        return self.pid

    def close(self) -> int | None:
        """Flush the decoder and match whatever is left; resolve the future."""
        if self.pid is None:
            self._pending += self._decoder.decode(b"", final=True)
            self._match(self._pending)
        self._pending = ""
        if not self.future.done():
            self.future.set_result(self.pid)
        return self.pid

    def _match(self, line: str) -> bool:
        m = PID_RE.search(line)
        if not m:
            return False
        self.pid = int(m.group(1))
        log.debug("Recovered browser PID %d", self.pid)
        if not self.future.done():
            self.future.set_result(self.pid)
        if self._on_pid is not None:
            self._on_pid(self.pid)
        return True

    def watch(self, stream) -> threading.Thread:
        """Drain *stream* on a daemon thread until EOF."""
        thread = threading.Thread(target=self._pump, args=(stream,), daemon=True,
                                  name="edge-pid-watcher")
        thread.start()
        return thread

    def _pump(self, stream):
        read = getattr(stream, "read1", None) or stream.read
        try:
            for chunk in iter(partial(read, _READ_SIZE), b""):
                if not chunk:
                    break
                self.feed(chunk)
        except (OSError, ValueError) as e:
            log.debug("stderr watcher stopped: %s", e)
        finally:
            if self.close() is None and self._expect_pid:
                log.warning("Browser PID was never announced (%s)",
                            LaunchSignal.PID_RECOVERY_FAILURE.value)


def build_windows_command_line(executable: str, url: str, user_data_dir: str, flags) -> str:
    """Windows-quoted command line for the browser process.

    Arguments with spaces, the executable under ``Program Files`` included,
    are double-quoted so CreateProcess does not have to guess where the
    executable path ends. The whole line then reaches wmic.exe as one argv
    element, e.g. ``"C:\\Program Files\\...\\msedge.exe" http://host/ --user-data-dir=C:\\Temp``.
    """
    return subprocess.list2cmdline([executable, url, f"--user-data-dir={user_data_dir}", *flags])


def build_bridge_script(command_line: str) -> str:
    """Bash script that starts *command_line* via wmic and reports its PID."""
    return _BRIDGE_SCRIPT.format(command_line=shlex.quote(command_line), marker=PID_MARKER)


def spawn_bridged(script: str, on_pid=None, shell: str = "/bin/bash"):
    """Run the bridge *script* and start watching its stderr.

    Returns ``(process, watcher)``; ``watcher.pid`` stays None until the
    marker line arrives.
    """
    try:
        proc = subprocess.Popen(
            [shell, "-c", script],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        raise LauncherError(LaunchSignal.SPAWN_FAILURE, f"{shell}: {e}") from e
    watcher = PidWatcher(on_pid=on_pid)
    watcher.watch(proc.stderr)
    return proc, watcher
