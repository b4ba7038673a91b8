"""Edge command-line flag construction.

Pure functions over lists of strings; nothing here spawns a process.
Switch reference: http://peter.sh/experiments/chromium-command-line-switches/
"""
JS_FLAGS_PREFIX = "--js-flags="
REMOTE_DEBUGGING_PREFIX = "--remote-debugging-port="
DEFAULT_DEBUGGING_PORT = 9222

# Disables crankshaft optimizations, which leak memory on the canary channel.
CANARY_JS_FLAGS = "--nocrankshaft --noopt"

DEFAULT_FLAGS = (
    # https://github.com/GoogleChrome/chrome-launcher/blob/master/docs/chrome-flags-for-tools.md#--enable-automation
    "--enable-automation",
    "--no-default-browser-check",
    "--no-first-run",
    "--disable-default-apps",
    "--disable-popup-blocking",
    "--disable-translate",
    "--disable-background-timer-throttling",
    # macOS also needs renderer backgrounding disabled
    "--disable-renderer-backgrounding",
    "--disable-device-discovery-notifications",
)

HEADLESS_FLAGS = (
    "--headless",
    "--disable-gpu",
    "--disable-dev-shm-usage",
)


def is_js_flags(flag: str) -> bool:
    return flag.startswith(JS_FLAGS_PREFIX)


def sanitize_js_flags(flag: str) -> str:
    """Strip one level of quoting from a ``--js-flags=`` value.

    The process spawner quotes arguments itself, so ``--js-flags='--foo'``
    would reach the browser with the quotes still in it. Unterminated or
    mismatched quoting leaves the flag untouched. Nested layers such as
    ``'"--foo"'`` are all removed so a second call is a no-op.
    """
    if not is_js_flags(flag):
        return flag
    value = flag[len(JS_FLAGS_PREFIX):]
    while len(value) >= 2 and value[0] in ("'", '"') and value[-1] == value[0]:
        value = value[1:-1]
    return JS_FLAGS_PREFIX + value


def build_base_flags(user_flags=()) -> list[str]:
    """Default automation flags followed by the user's, js-flags sanitized."""
    return list(DEFAULT_FLAGS) + [sanitize_js_flags(f) for f in user_flags]


def build_headless_flags(base_flags, wsl: bool = False) -> list[str]:
    """Append the headless switches and a debugging port if none was given.

    Under WSL headless Edge runs as root and refuses to start without
    ``--no-sandbox``.
    """
    flags = list(base_flags) + list(HEADLESS_FLAGS)
    if wsl:
        flags.append("--no-sandbox")
    if not any(REMOTE_DEBUGGING_PREFIX in (f or "") for f in flags):
        flags.append(f"{REMOTE_DEBUGGING_PREFIX}{DEFAULT_DEBUGGING_PORT}")
    return flags


def build_canary_flags(base_flags) -> list[str]:
    """Add the canary memory-leak workaround to the ``--js-flags=`` entry.

    The last existing js-flags entry is sanitized and extended in place;
    without one a fresh entry is appended.
    """
    flags = list(base_flags)
    for i in range(len(flags) - 1, -1, -1):
        if is_js_flags(flags[i]):
            flags[i] = f"{sanitize_js_flags(flags[i])} {CANARY_JS_FLAGS}"
            return flags
    flags.append(JS_FLAGS_PREFIX + CANARY_JS_FLAGS)
    return flags
