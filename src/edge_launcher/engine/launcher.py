"""EdgeLauncher: start/kill hooks for one Edge variant.

One generic class serves every release channel; the variant record decides
the flag strategy and default commands. Under WSL the launcher either runs a
Linux Edge directly or bridges to the Windows install through wmic, in which
case the Windows PID is recovered from the bridge shell's stderr.
"""
import asyncio
import logging
import ntpath
import os
import posixpath
import shutil
import signal
import subprocess

from ..browser.environment import PlatformInfo
from ..browser.flags import build_base_flags, build_canary_flags, build_headless_flags
from ..browser.wsl import wslpath
from ..config import LauncherArgs
from ..errors import LaunchSignal, LauncherError
from ..telemetry.logger import LaunchEventLogger
from ..variants import BrowserVariant, DefaultCommands, build_default_commands
from .pid import PidWatcher, build_bridge_script, build_windows_command_line, spawn_bridged

log = logging.getLogger(__name__)

NATIVE = "native"
BRIDGED = "bridged"


def call_soon(callback) -> None:
    """Run *callback* on the next loop iteration, or now if no loop is running."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        callback()
    else:
        loop.call_soon(callback)


class EdgeLauncher:
    """Launcher registered with the host for a single Edge variant.

    ``base_browser_decorator`` is the host's base-launcher decorator; it must
    attach the ``HostLauncher`` members (see ``edge_launcher.host``).
    """

    inject = ["base_browser_decorator", "args"]

    def __init__(
        self,
        base_browser_decorator,
        args,
        *,
        variant: BrowserVariant,
        info: PlatformInfo,
        default_cmd: DefaultCommands | None = None,
    ):
        self.variant = variant
        self.name = variant.name
        self.ENV_CMD = variant.env_cmd
        self.DEFAULT_CMD = (default_cmd or build_default_commands(variant, info)).as_dict()
        self._info = info

        base_browser_decorator(self)

        self._args = LauncherArgs.from_mapping(args)
        self._user_data_dir = self._args.edge_data_dir or self._temp_dir
        self._mode: str | None = None
        self._bridge_process = None
        self._watcher: PidWatcher | None = None
        self._events: LaunchEventLogger | None = None
        self._run_id: str | None = None
        self._killed = False

        self.on("kill", self._on_kill)

    # ── State ───────────────────────────────────────────────────────────────

    @property
    def mode(self) -> str | None:
        """``native``, ``bridged``, or None before the first start."""
        return self._mode

    @property
    def bridged(self) -> bool:
        return self._mode == BRIDGED

    @property
    def process(self):
        """The authoritative handle for the current launch."""
        return self._bridge_process if self.bridged else getattr(self, "_process", None)

    @property
    def browser_pid(self) -> int | None:
        """PID announced on stderr, or None until (unless) it arrives."""
        return self._watcher.pid if self._watcher is not None else None

    def _event_log(self) -> LaunchEventLogger | None:
        if not self._args.event_log_dir:
            return None
        if self._killed and self._events is None:
            # nothing is logged after kill
            return None
        if self._events is None:
            self._events = LaunchEventLogger(self.name, self._args.event_log_dir, run_id=self._run_id)
            self._run_id = self._events.run_id
        return self._events

    # ── Options ─────────────────────────────────────────────────────────────

    def _get_options(self) -> list[str]:
        flags = build_base_flags(self._args.flags)
        if self.variant.canary:
            flags = build_canary_flags(flags)
        if self.variant.headless:
            flags = build_headless_flags(flags, wsl=self._info.is_wsl)
        return flags

    # ── Start ───────────────────────────────────────────────────────────────

    def _should_bridge(self, options) -> bool:
        """Under WSL, use Windows Edge unless a usable Linux Edge is present.

        A headed Linux Edge needs an X server, so without DISPLAY the
        Windows side is used as well.
        """
        if not self._info.is_wsl:
            return False
        linux = self.DEFAULT_CMD.get("linux")
        if not linux or not shutil.which(linux, path=self._info.env.get("PATH")):
            return True
        return "--headless" not in options and not self._info.env.get("DISPLAY")

    def _start(self, url: str) -> None:
        self._killed = False
        self._watcher = None
        self._bridge_process = None
        options = self._get_options()
        mode = BRIDGED if self._should_bridge(options) else NATIVE
        try:
            if mode == BRIDGED:
                self._start_bridged(url, options)
            else:
                self._start_native(url, options)
        except LauncherError as e:
            log.error("%s did not start (%s): %s", self.name, e.signal.value, e)
            self._log_failure(mode, e.signal, e)
        except OSError as e:
            log.error("%s did not start: %s", self.name, e)
            self._log_failure(mode, LaunchSignal.SPAWN_FAILURE, e)

    def _log_failure(self, mode, signal_, error):
        events = self._event_log()
        if events is not None:
            events.log_launch_failed(mode, signal_.value, str(error))

    def _start_native(self, url: str, options) -> None:
        command = self.DEFAULT_CMD["linux"] if self._info.is_wsl else self._get_command()
        args = [url, f"--user-data-dir={self._user_data_dir}", *options]
        log.info("Launching %s: %s", self.name, command)
        self._mode = NATIVE
        events = self._event_log()
        if events is not None:
            events.log_launch_start(url, NATIVE, command or "", options)
        self._exec_command(command, args)

        stderr = getattr(getattr(self, "_process", None), "stderr", None)
        if stderr is not None and hasattr(stderr, "read"):
            # native Edge rarely announces a PID; its absence is not a failure
            self._watcher = PidWatcher(on_pid=self._pid_recovered, expect_pid=False)
            self._watcher.watch(stderr)

    def _to_windows(self, path: str) -> str:
        try:
            return wslpath(path)
        except LauncherError as e:
            log.warning("Using untranslated path %s: %s", path, e)
            return path

    def _start_bridged(self, url: str, options) -> None:
        log.info("WSL: using Windows %s", self.name)
        win32 = self.DEFAULT_CMD.get("win32")
        if not win32:
            raise LauncherError(LaunchSignal.EXECUTABLE_NOT_FOUND, "no Windows Edge path")

        user_data_dir = self._to_windows(self._user_data_dir)
        # Only the directory is translated; wslpath needs it to exist.
        exe_dir, exe = posixpath.split(win32)
        executable = ntpath.join(self._to_windows(exe_dir), exe)

        command_line = build_windows_command_line(executable, url, user_data_dir, options)
        self._mode = BRIDGED
        events = self._event_log()
        if events is not None:
            events.log_launch_start(url, BRIDGED, executable, options)
        self._bridge_process, self._watcher = spawn_bridged(
            build_bridge_script(command_line), on_pid=self._pid_recovered,
        )

    def _pid_recovered(self, pid: int) -> None:
        log.info("%s running as PID %d", self.name, pid)
        events = self._event_log()
        if events is not None:
            events.log_pid_recovered(pid)

    # ── Kill ────────────────────────────────────────────────────────────────

    def _terminate(self, pid: int) -> None:
        if self.bridged:
            subprocess.Popen(
                ["Taskkill.exe", "/PID", str(pid), "/F", "/FI", "STATUS eq RUNNING"],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        else:
            os.kill(pid, signal.SIGTERM)

    def _on_kill(self, done) -> None:
        """Kill the separately-tracked browser PID, then always call *done*."""
        try:
            pid = self.browser_pid
            if pid:
                ok = True
                try:
                    self._terminate(pid)
                except (OSError, OverflowError, ValueError) as e:
                    # the browser may already have exited
                    ok = False
                    log.debug("Kill of PID %d failed (%s): %s", pid, LaunchSignal.KILL_FAILURE.value, e)
                events = self._event_log()
                if events is not None:
                    events.log_kill(pid, self._mode, ok)
            elif self._mode == BRIDGED:
                log.warning("%s: Windows PID unknown, cannot kill the browser", self.name)
        finally:
            self._killed = True
            if self._events is not None:
                self._events.close()
                self._events = None
            call_soon(done)
