import sys
import traceback
from typing import Any

from uvicorn.server import logger

from util.config import config

LEVELS = {"trace": 0, "debug": 1, "info": 2, "warn": 3, "warning": 3, "error": 4}


def _should_log(level: str) -> bool:
    if config.log_level == "local":
        return True  # everything goes out when running locally
    current_level = LEVELS.get(config.log_level, LEVELS["info"])
    return LEVELS.get(level.lower(), LEVELS["info"]) >= current_level


def _format_args(*args: Any) -> tuple[str, list[Exception]]:
    exceptions: list[Exception] = []
    parts: list[str] = []
    for arg in args:
        if isinstance(arg, Exception):
            exceptions.append(arg)
            parts.append(f"! {type(arg).__name__} (see below)")
        else:
            parts.append(str(arg))

    if len(parts) <= 1:
        return (parts[0] if parts else ""), exceptions
    if exceptions:
        return "\n ├─ ".join(parts), exceptions
    return "\n ├─ ".join(parts[:-1]) + f"\n └─ {parts[-1]}", exceptions


def _trace_of(exception: Exception) -> str | None:
    if not exception.__traceback__:
        return None
    return "".join(traceback.format_tb(exception.__traceback__)).strip()


def _print_locally(level: str, message: str, exceptions: list[Exception]):
    print(f"[{level[0]}] {message}")
    for exception in exceptions:
        print(f" ‼  Message: {exception}", file = sys.stderr)
        if trace := _trace_of(exception):
            print(trace, file = sys.stderr)


def _log_message(level: str, message: str, exceptions: list[Exception]) -> str:
    if not _should_log(level) and not exceptions:
        return message

    if config.log_level == "local":
        _print_locally(level, message, exceptions)
        return message

    if _should_log(level):
        match level:
            case "TRACE" | "DEBUG":
                logger.debug(message)
            case "INFO":
                logger.info(message)
            case "WARN":
                logger.warning(message)
            case "ERROR":
                logger.error(message)
    for exception in exceptions:
        logger.error(f"Message: {exception}")
        if trace := _trace_of(exception):
            logger.error(f"Details:\n └─ {trace}")
    return message


def t(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("TRACE", message, exceptions)


def d(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("DEBUG", message, exceptions)


def i(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("INFO", message, exceptions)


def w(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("WARN", message, exceptions)


def e(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("ERROR", message, exceptions)
