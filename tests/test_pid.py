"""Tests for PidWatcher and the bridge script — synthetic stderr chunks."""
import io
import shlex

from edge_launcher.engine.pid import (
    PID_MARKER,
    PidWatcher,
    build_bridge_script,
    build_windows_command_line,
)

LINE = f"{PID_MARKER} debug me @ 4242\n".encode()


def test_single_chunk():
    watcher = PidWatcher()
    assert watcher.feed(LINE) == 4242
    assert watcher.future.result(timeout=0) == 4242


def test_marker_split_across_chunks():
    watcher = PidWatcher()
    for i in range(0, len(LINE), 5):
        watcher.feed(LINE[i:i + 5])
    assert watcher.pid == 4242


def test_pid_digits_split_not_read_short():
    watcher = PidWatcher()
    watcher.feed(f"{PID_MARKER} debug me @ 42".encode())
    assert watcher.pid is None
    watcher.feed(b"42\n")
    assert watcher.pid == 4242


def test_multibyte_split_across_chunks():
    data = "ошибка\n".encode() + LINE
    watcher = PidWatcher()
    watcher.feed(data[:3])   # splits the second Cyrillic character
    watcher.feed(data[3:])
    assert watcher.pid == 4242


def test_noise_before_marker():
    watcher = PidWatcher()
    watcher.feed(b"[1234:5678:ERROR:gpu_init.cc] whatever\n")
    watcher.feed(b"  " + LINE)
    assert watcher.pid == 4242


def test_trailing_line_matched_on_close():
    watcher = PidWatcher()
    watcher.feed(LINE.rstrip(b"\n"))
    assert watcher.pid is None
    assert watcher.close() == 4242


def test_never_matched():
    watcher = PidWatcher()
    watcher.feed(b"Method execution successful.\nReturnValue = 9;\n")
    assert watcher.close() is None
    assert watcher.future.result(timeout=0) is None


def test_first_pid_wins():
    watcher = PidWatcher()
    watcher.feed(LINE + f"{PID_MARKER} debug me @ 7\n".encode())
    assert watcher.pid == 4242


def test_accepts_text_chunks():
    watcher = PidWatcher()
    watcher.feed(LINE.decode())
    assert watcher.pid == 4242


def test_on_pid_callback_called_once():
    seen = []
    watcher = PidWatcher(on_pid=seen.append)
    watcher.feed(LINE)
    watcher.feed(LINE)
    watcher.close()
    assert seen == [4242]


def test_watch_drains_stream():
    watcher = PidWatcher()
    thread = watcher.watch(io.BytesIO(b"noise\n" + LINE))
    thread.join(timeout=5)
    assert watcher.future.result(timeout=5) == 4242


def test_watch_stream_without_marker():
    watcher = PidWatcher()
    watcher.watch(io.BytesIO(b"nothing here"))
    assert watcher.future.result(timeout=5) is None


def test_windows_command_line_quotes_spaces():
    line = build_windows_command_line(
        "C:\\Program Files (x86)\\Microsoft\\Edge\\Application\\msedge.exe",
        "http://localhost:9876/?id=1",
        "C:\\Temp\\profile",
        ["--no-first-run", "--js-flags=--x --noopt"],
    )
    assert line == (
        '"C:\\Program Files (x86)\\Microsoft\\Edge\\Application\\msedge.exe" '
        "http://localhost:9876/?id=1 "
        "--user-data-dir=C:\\Temp\\profile "
        '--no-first-run "--js-flags=--x --noopt"'
    )


def test_bridge_script():
    command_line = '"C:\\Edge\\msedge.exe" http://localhost:9876/'
    script = build_bridge_script(command_line)
    assert f"wmic.exe process call create {shlex.quote(command_line)}" in script
    assert f'echo >&2 "{PID_MARKER} debug me @ $pid"' in script
    assert "${line#*ProcessId = }" in script
    assert "${removePrefix%;*}" in script
    assert "printf '%s\\n'" in script


def test_missing_pid_warns_when_expected(caplog):
    watcher = PidWatcher()
    with caplog.at_level("WARNING"):
        thread = watcher.watch(io.BytesIO(b"no marker\n"))
        thread.join(timeout=5)
    assert "never announced" in caplog.text


def test_missing_pid_silent_when_not_expected(caplog):
    watcher = PidWatcher(expect_pid=False)
    with caplog.at_level("WARNING"):
        thread = watcher.watch(io.BytesIO(b"no marker\n"))
        thread.join(timeout=5)
    assert "never announced" not in caplog.text


def test_wmic_argument_is_one_quoted_word():
    command_line = build_windows_command_line(
        "C:\\Program Files\\Microsoft\\Edge\\Application\\msedge.exe",
        "http://localhost:9876/",
        "C:\\Temp\\p",
        ["--no-first-run"],
    )
    script = build_bridge_script(command_line)
    wmic_line = next(line for line in script.splitlines() if "wmic.exe" in line)
    assert wmic_line == (
        "processString=$(wmic.exe process call create "
        "'\"C:\\Program Files\\Microsoft\\Edge\\Application\\msedge.exe\" "
        "http://localhost:9876/ --user-data-dir=C:\\Temp\\p --no-first-run');"
    )
    assert shlex.split(wmic_line[len("processString=$(wmic.exe process call create "):-2]) == [command_line]
