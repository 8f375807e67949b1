"""Error handling decorator for notation API routes."""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog
from fastapi import HTTPException, status
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from domain.exceptions import InfrastructureError, MonomerLibraryError
from interfaces.api.routes.helpers import _map_app_error_to_http_exception

logger = structlog.get_logger()

T = TypeVar("T")


def _unwrap_result(result: Result[Any, AppError], endpoint: str) -> Any:  # noqa: ANN401
    if isinstance(result, Success):
        return result.unwrap()
    if isinstance(result, Failure):
        error = result.failure()
        logger.info("use_case_failed", endpoint=endpoint, category=error.category, rule=error.rule)
        raise _map_app_error_to_http_exception(error) from None
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unexpected result type",
    )


def handle_use_case_errors(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """Turn a use case Result into a response body or an HTTPException.

    - Success results are unwrapped
    - Failure results are mapped by category (see helpers)
    - A monomer library or chemistry toolkit that cannot be loaded gives 503
    - Anything else is logged and reported as 500

    Args:
        func: An async endpoint function that returns a use case Result;
            its annotated return type is the unwrapped response model

    Returns:
        Wrapped function returning the unwrapped value

    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:  # noqa: ANN401
        try:
            result = await func(*args, **kwargs)
            return _unwrap_result(result, func.__name__)
        except HTTPException:
            raise
        except MonomerLibraryError as exc:
            logger.exception("monomer_library_unavailable", error=str(exc), function=func.__name__)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Monomer library unavailable",
            ) from exc
        except InfrastructureError as exc:
            logger.exception("infrastructure_error", error=str(exc), function=func.__name__)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Service temporarily unavailable",
            ) from exc
        except Exception as exc:
            logger.exception(
                "unexpected_error",
                error=str(exc),
                error_type=type(exc).__name__,
                function=func.__name__,
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            ) from exc

    return wrapper
