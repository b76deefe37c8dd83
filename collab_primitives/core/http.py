import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Union

from fastapi import HTTPException


logger = logging.getLogger(__name__)

ContextValue = Union[Any, Callable[[], Any]]


def context(error: HTTPException, cx: Any) -> HTTPException:
    """Return a copy of ``error`` whose detail is prefixed with ``cx``.

    ``cx`` is used as-is, even when it is callable. Status code and headers
    are carried over unchanged.
    """
    wrapped = HTTPException(
        status_code=error.status_code,
        detail=f"{cx}: {error.detail}",
        headers=getattr(error, "headers", None),
    )
    wrapped.__cause__ = error
    return wrapped


def with_context(error: HTTPException, cx: ContextValue) -> HTTPException:
    """Like :func:`context`, but a callable ``cx`` is a factory.

    The factory is called with no arguments, only here, i.e. once a failure
    actually exists. Use :func:`context` to attach a callable value as-is.
    """
    return context(error, cx() if callable(cx) else cx)


@contextmanager
def http_context(cx: ContextValue) -> Iterator[None]:
    """Attach ``cx`` to any HTTPException raised inside the block."""
    try:
        yield
    except HTTPException as e:
        wrapped = with_context(e, cx)
        logger.debug(f"HTTP error {e.status_code} annotated: {wrapped.detail}")
        raise wrapped from e
