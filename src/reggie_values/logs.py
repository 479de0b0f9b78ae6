"""
Logger lookup and opt in console configuration.

Library modules only call ``logger``. Applications that want console output
call ``auto_config`` once.

Environment variables read by auto_config
- LOGGING_LEVEL: level name or number, defaults to INFO
- LOGGING_SERVER: if truthy, write timestamps even when attached to a terminal
"""

import logging
import os
import platform
import sys
from collections.abc import Iterable

_AUTO_CONFIG_MARK = object()


def logger(*names: str | None) -> logging.Logger:
    """
    Return a logger for the resolved name or the root logger.

    Selection rules
    1) Use the first non empty name that is not "__main__"
    2) If a name looks like a file path, use its basename without extension
    3) If nothing resolves, return the root logger
    """
    name = _logger_name(*names)
    return logging.getLogger(name) if name else logging.getLogger()


def auto_config(level=None) -> bool:
    """
    Attach stdout and stderr handlers to the root logger once.

    Records below WARNING go to stdout, WARNING and above to stderr. level
    overrides LOGGING_LEVEL. Returns False when handlers were already attached.
    """
    root = logging.getLogger()
    for handler in root.handlers:
        if _AUTO_CONFIG_MARK is getattr(handler, "auto_config_mark", None):
            return False
    level_value, _ = get_level(
        level if level is not None else os.getenv("LOGGING_LEVEL", logging.INFO),
        logging.INFO,
    )
    for handler in _auto_config_handlers():
        root.addHandler(handler)
    root.setLevel(level_value)
    return True


def get_levels() -> Iterable[tuple[int, str]]:
    """Return all known logging levels as (value, name) pairs."""
    return [(val, name) for name, val in logging.getLevelNamesMapping().items()]


def get_level(level, default=None) -> tuple[int, str]:
    """
    Resolve a level specifier to a (value, name) pair.

    Accepts
    - int: treated as a level value
    - str: a number, an exact name, a case insensitive name,
           then an unambiguous case insensitive prefix

    If default is provided and resolution fails, default is resolved by the
    same rules and returned.

    Raises
    - ValueError on invalid or ambiguous values when default is not given
    """
    if isinstance(level, str) and level.strip().isdigit():
        level = int(level.strip())
    if isinstance(level, int):
        if name := logging._levelToName.get(level, None):
            return level, name
    elif level is not None:
        level_names = get_levels()
        level = str(level).strip()
        matched: dict[str, int] = {}
        for val, name in level_names:
            if name == level:
                return val, name
            if name.casefold() == level.casefold():
                matched = {name: val}
                break
            if level and name.casefold().startswith(level.casefold()):
                matched.setdefault(name, val)
        if len(matched) == 1:
            name, val = matched.popitem()
            return val, name
        elif len(matched) > 1 and default is None:
            raise ValueError(f"Ambiguous level: {level}")
    if default is not None:
        return get_level(default)
    raise ValueError(f"Invalid level: {level}")


def _logger_name(*names: str | None) -> str | None:
    for name in names:
        if not name or name == "__main__":
            continue
        if os.sep in name or name.endswith(".py"):
            name = os.path.splitext(os.path.basename(name))[0]
            if not name or name == "__main__":
                continue
        return name
    return None


def _auto_config_handlers() -> Iterable[logging.Handler]:
    for error in [False, True]:
        stream = sys.stdout if not error else sys.stderr
        handler = Handler(stream=stream)
        handler.auto_config_mark = _AUTO_CONFIG_MARK
        handler.setFormatter(Formatter(stream=stream))
        if error:
            handler.setLevel(logging.WARNING)
        else:
            handler.addFilter(lambda record: record.levelno < logging.WARNING)
        yield handler


def _env_flag(name: str, default=None) -> bool:
    # truths logs through this module, so it is imported on use
    from reggie_values import truths

    return truths.is_truthy(os.getenv(name, default))


def _is_interactive(stream=None) -> bool:
    if stream is None:
        stream = sys.stdin
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def _is_server(stream=None) -> bool:
    """Return True when output is headless, so records need timestamps."""
    if _env_flag("LOGGING_SERVER"):
        return True
    if platform.system() in ("Windows", "Darwin"):
        return False
    if not _is_interactive(stream):
        return True
    if not (os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY")):
        return True
    return any(os.getenv(k) for k in ("CI", "KUBERNETES_SERVICE_HOST", "CONTAINER"))


class Handler(logging.StreamHandler):
    """StreamHandler that colors records by level on ANSI capable terminals."""

    COLORS = {
        logging.DEBUG: "\033[38;2;180;180;180m",
        logging.INFO: None,
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record):
        msg = super().format(record)
        color = self._color(record.levelno) if self._supports_color() else ""
        return f"{color}{msg}{self.RESET}" if color else msg

    def _supports_color(self) -> bool:
        if os.name == "nt" or not _is_interactive(self.stream):
            return False
        return os.getenv("TERM", "").casefold() not in ("dumb", "", "unknown")

    @staticmethod
    def _color(levelno) -> str:
        """Color of the closest configured level at or below levelno."""
        lower = [k for k in Handler.COLORS if k <= levelno]
        return (Handler.COLORS[max(lower)] or "") if lower else ""


class Formatter(logging.Formatter):
    """
    Compact "[time] LEVEL [name] | message" formatter.

    The timestamp is only written in server mode and the name is omitted for
    the root logger.
    """

    def __init__(self, *args, stream=None, server: bool | None = None, **kwargs):
        super().__init__(*args, datefmt="%Y-%m-%d %H:%M:%S", **kwargs)
        self._server = _is_server(stream) if server is None else server

    def formatMessage(self, record):
        head = [record.levelname]
        if self._server:
            head.insert(0, self.formatTime(record, self.datefmt))
        if record.name and record.name != logging.root.name:
            head.append(f"[{record.name}]")
        return f"{' '.join(head)} | {record.message}"
