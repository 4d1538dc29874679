"""
Logging helpers shared by the extension modules.

Environment variables
- LOGGING_AUTO_CONFIG: if false, never install the default stdout/stderr handlers
- LOGGING_SERVER: if true, treat this process as a server even if a TTY exists
- LOGGING_LEVEL: root level applied by auto_config, defaults to INFO
"""

import functools
import logging
import os
import platform
import sys
from collections.abc import Callable, Iterable
from pathlib import Path

from reggie_extensions import bools, strs

_LOGGING_AUTO_CONFIG = bools.to_bool(os.getenv("LOGGING_AUTO_CONFIG"), True)
_LOGGING_SERVER = bools.to_bool(os.getenv("LOGGING_SERVER"))
_LOGGING_LEVEL = os.getenv("LOGGING_LEVEL")
_AUTO_CONFIG_MARK = object()


def auto_config():
    """Install the default handlers on the root logger once per process."""
    if not _LOGGING_AUTO_CONFIG or _has_auto_config_handler():
        return
    level, _ = get_level(_LOGGING_LEVEL or logging.INFO, logging.INFO)
    logging.basicConfig(level=level, handlers=list(_auto_config_handlers()))


def logger(*names: str | None) -> logging.Logger:
    """
    Return a logger for the first usable name or the root logger.

    Empty names and "__main__" are skipped. A name that looks like a file path
    is reduced to its stem, so logger(__file__) and logger(__name__) both work.
    """
    auto_config()
    name = _logger_name(*names)
    return logging.getLogger(name) if name else logging.getLogger()


def get_level(level, default=None) -> tuple[int, str]:
    """
    Resolve a level specifier to a (value, name) pair.

    Accepts ints, exact names, case insensitive names and unambiguous case
    insensitive prefixes ("crit" -> CRITICAL). When resolution fails default
    is resolved instead, if given.

    Raises
    - ValueError on invalid or ambiguous values when default is not given
    """
    if isinstance(level, int):
        if name := logging.getLevelName(level):
            if not name.startswith("Level "):
                return level, name
    elif level is not None and not strs.is_empty(str(level)):
        level = str(level).strip()
        names = logging.getLevelNamesMapping()
        if level in names:
            return names[level], level
        matched = {
            name: val
            for name, val in names.items()
            if name.casefold().startswith(level.casefold())
        }
        for name, val in matched.items():
            if name.casefold() == level.casefold():
                return val, name
        if len(set(matched.values())) == 1:
            _, val = matched.popitem()
            return val, logging.getLevelName(val)
        elif len(matched) > 1 and default is None:
            raise ValueError(f"Ambiguous level: {level}")
    if default is not None:
        return get_level(default)
    raise ValueError(f"Invalid level: {level}")


def _has_auto_config_handler() -> bool:
    for handler in logging.getLogger().handlers:
        if getattr(handler, "auto_config_mark", None) is _AUTO_CONFIG_MARK:
            return True
    return False


def _logger_name(*names: str | None) -> str | None:
    for name in names:
        if strs.is_empty(name) or name == "__main__":
            continue
        if os.sep in name or name.endswith(".py"):
            name = Path(name).stem
            if not name or name == "__main__":
                continue
        return name
    return None


def _auto_config_handlers() -> Iterable[logging.Handler]:
    for error in (False, True):
        stream = sys.stderr if error else sys.stdout
        handler = Handler(stream=stream)
        handler.auto_config_mark = _AUTO_CONFIG_MARK
        handler.setFormatter(Formatter(stream=stream))
        if error:
            handler.setLevel(logging.WARNING)
        else:
            handler.addFilter(lambda record: record.levelno < logging.WARNING)
        yield handler


def _is_interactive(stream=None) -> bool:
    stream = sys.stdin if stream is None else stream
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


@functools.cache
def _is_server_environment() -> bool:
    if platform.system() in ("Windows", "Darwin"):
        return False
    if not (os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY")):
        return True
    return any(
        os.getenv(k)
        for k in ("CI", "KUBERNETES_SERVICE_HOST", "CONTAINER", "SYSTEMD_EXEC_PID")
    )


def _is_server(stream=None) -> bool:
    """Return True if this process looks like a server or non interactive runtime."""
    if _LOGGING_SERVER:
        return True
    if not _is_interactive(stream):
        return True
    return _is_server_environment()


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
        if not self._supports_color():
            return msg
        color = self._color(record.levelno)
        return f"{color}{msg}{self.RESET}" if color else msg

    def _supports_color(self) -> bool:
        if not _is_interactive(self.stream) or os.name == "nt":
            return False
        term = os.getenv("TERM", "")
        return term.casefold() not in ("", "dumb", "unknown")

    @staticmethod
    def _color(levelno: int) -> str:
        """Return the color of the closest configured level at or below levelno."""
        levels = [k for k in Handler.COLORS if k <= levelno]
        return (Handler.COLORS[max(levels)] or "") if levels else ""


class Formatter(logging.Formatter):
    """
    Space separated formatter: [timestamp] level [name] | message.

    The timestamp is only included in server mode and the name is omitted for
    the root logger.
    """

    def __init__(self, *args, stream=None, **kwargs):
        super().__init__(*args, datefmt="%Y-%m-%d %H:%M:%S", **kwargs)
        self._fields: list[Callable[[logging.LogRecord], str]] = []
        if _is_server(stream):
            self._fields.append(lambda x: self.formatTime(x, self.datefmt))
        self._fields.append(lambda x: x.levelname)
        self._fields.append(
            lambda x: f"[{x.name}]" if x.name and x.name != logging.root.name else ""
        )

    def formatMessage(self, record):
        header = " ".join(v for f in self._fields if (v := f(record)))
        return f"{header} | {record.message}" if header else record.message
