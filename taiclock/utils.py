"""Logging setup shared by scripts and tests."""

import datetime
import logging
import logging.config
import typing
from pathlib import Path

logger = logging.getLogger(__name__)

_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _resolve_log_file(log_file):
    stamp = datetime.datetime.now(datetime.timezone.utc).strftime("%Y%m%dT%H%M%S")
    name = f"taiclock.{stamp}.log"
    if log_file is True:
        return Path.cwd() / name
    path = Path(log_file)
    return path / name if path.is_dir() else path


def enable_logging(log_level=logging.DEBUG, log_file: typing.Union[bool, str, Path] = False, extra_loggers=None):
    """Send taiclock log records to stdout and, if requested, a file.

    Parameters
    ----------
    log_level : int
        Level for the console and the package loggers.
    log_file : bool or str or Path, optional
        True writes a timestamped ``taiclock.<UTC>.log`` in the working
        directory, a directory writes that name inside it, and any other path
        is used as is. File logging always runs at DEBUG.
    extra_loggers : list of str, optional
        Logger names (e.g. a test module) that get the same level as the
        package.

    """
    level = logging.DEBUG if log_file else log_level
    loggers = {name: {"level": level} for name in ["taiclock", *(extra_loggers or [])]}

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": "brief",
            "stream": "ext://sys.stdout",
        },
    }
    if log_file:
        log_file = _resolve_log_file(log_file)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": logging.DEBUG,
            "formatter": "verbose",
            "filename": str(log_file),
            "mode": "a",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "brief": {"format": "[%(asctime)s.%(msecs)03d] %(message)s", "datefmt": _DATE_FORMAT},
                "verbose": {
                    "format": "[%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s:%(lineno)d] %(message)s",
                    "datefmt": _DATE_FORMAT,
                },
            },
            "handlers": handlers,
            "loggers": loggers,
            "root": {"level": level, "handlers": list(handlers)},
        }
    )

    if log_file:
        logger.debug("Logging to file: %s", log_file)
