"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from taskledger.models import TaskLedgerError
from taskledger.services.config_service import get_config_service
from taskledger.utils import exit_codes
from taskledger.utils.logger import get_logger
from taskledger.utils.ui.formatters import format_error


def _get_logger():
    """Application logger at the configured level."""
    try:
        level = get_config_service().config.log_level
    except RuntimeError:
        # Unreadable config; the command reports it once it loads the config itself.
        level = "INFO"
    return get_logger(level)


def command_wrapper(func: Callable):
    """Run a sync or async command, log its duration and map errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = _get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except TaskLedgerError as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s [%s]",
                cmd,
                elapsed,
                e.message,
                exit_codes.get_exit_code_name(e.exit_code),
            )
            format_error(e.message)
            raise typer.Exit(code=e.exit_code) from e

        except typer.Exit:
            # Typer's own exits (--help, explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
