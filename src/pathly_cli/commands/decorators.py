"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from pathly_cli.models.exceptions import (
    GoalNotFoundError,
    InsufficientPointsError,
    InvalidDependencyError,
    InvalidGoalOperationError,
    PathlyError,
    PersistenceError,
    RewardNotFoundError,
)
from pathly_cli.utils.exit_codes import (
    ERROR_CONFLICT,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
)
from pathly_cli.utils.logger import get_logger
from pathly_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def exit_code_for(error: PathlyError) -> int:
    """Map an engine error to a semantic exit code."""
    if isinstance(error, (GoalNotFoundError, RewardNotFoundError)):
        return ERROR_NOT_FOUND
    if isinstance(error, PersistenceError):
        return ERROR_STORAGE
    if isinstance(error, InvalidDependencyError):
        return ERROR_INVALID_ARGS
    if isinstance(error, (InvalidGoalOperationError, InsufficientPointsError)):
        return ERROR_CONFLICT
    return ERROR_GENERAL


def _validation_message(error: ValidationError) -> str:
    details = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"])
        details.append(f"{field}: {item['msg']}" if field else item["msg"])
    return "Invalid input - " + "; ".join(details)


def command_wrapper(_func: Callable | None = None):
    """Decorator to wrap command functions with common functionality.

    Runs async commands to completion, logs start/finish with elapsed time
    and turns engine errors into a formatted message plus exit code.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)

            def fail(message: str, exit_code: int, error: Exception):
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, message)
                format_error(message)
                raise typer.Exit(code=exit_code) from error

            try:
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except AppError as e:
                fail(str(e), e.exit_code, e)

            except PathlyError as e:
                fail(str(e), exit_code_for(e), e)

            except ValidationError as e:
                fail(_validation_message(e), ERROR_INVALID_ARGS, e)

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
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
                # Generic fallback for unexpected crashes
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
