import asyncio
import logging
from contextlib import contextmanager
from typing import Iterator

from asyncpg import InterfaceError, PostgresError


class AppError(Exception):
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AppError):
    message = "Invalid request"


class Unauthenticated(AppError):
    message = "Token missing"


class InvalidCredential(AppError):
    """Bad password, unknown email, or a token that failed verification.

    All of these share one class so callers cannot tell which check failed.
    """
    message = "Invalid credentials"


class NotFound(AppError):
    message = "Not found"


class Unavailable(AppError):
    message = "Service unavailable"


class DuplicateEmail(Unavailable):
    message = "Server error during registration"


STORE_ERRORS = (PostgresError, InterfaceError, OSError, asyncio.TimeoutError)


@contextmanager
def translate_store_errors(message: str) -> Iterator[None]:
    """Log store failures and re-raise them as a generic ``Unavailable``."""
    try:
        yield
    except AppError:
        raise
    except STORE_ERRORS as e:
        logging.error(f"Store failure ({message}): {e}", exc_info=True)
        raise Unavailable(message) from e
