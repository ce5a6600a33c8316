# app/shared/middleware/exception_middleware.py (async version)

"""
Middleware for centralized exception handling.

Domain exceptions are translated through their `internal_code`; database
and unexpected errors become generic responses. Outside production the
detail carries the original message to ease debugging.
"""

import re
import time
import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.orm.exc import NoResultFound
from starlette.middleware.base import BaseHTTPMiddleware

from app.domain.exceptions import DomainException
from app.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

# Mapping from the domain 'internal_code' to the HTTP status
DOMAIN_STATUS_CODES: Dict[str, int] = {
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RESOURCE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "DEPENDENCY_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
    "DATABASE_OPERATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "CASCADE_DELETE_FAILED": status.HTTP_400_BAD_REQUEST,
}

# Codes whose detail may carry driver messages
SERVER_SIDE_CODES = {"DATABASE_OPERATION_ERROR", "DEPENDENCY_ERROR"}

CONSTRAINT_PATTERNS = [
    r'violates unique constraint "(.*?)"',
    r'violates foreign key constraint "(.*?)"',
    r'constraint "(.*?)"',
    r'UNIQUE constraint failed: (.*)',
    r'CONSTRAINT `(.*?)`',
]


def domain_status_code(exc: DomainException) -> int:
    return DOMAIN_STATUS_CODES.get(exc.internal_code, status.HTTP_400_BAD_REQUEST)


def extract_constraint_name(error_message: str) -> Optional[str]:
    """Constraint name from a driver integrity message, when recognizable."""
    for pattern in CONSTRAINT_PATTERNS:
        match = re.search(pattern, error_message)
        if match:
            return match.group(1)
    return None


def is_production() -> bool:
    return settings.ENVIRONMENT == "production"


def error_response(status_code: int, code: str, detail: Any, errors: Optional[Dict] = None) -> JSONResponse:
    content = {"detail": detail, "code": code}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Converts exceptions raised by the endpoints into JSON error responses.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        where = f"Path: {request.url.path} | Client: {request.client.host if request.client else 'N/A'}"
        try:
            response = await call_next(request)
            response.headers["X-Process-Time"] = str(time.perf_counter() - started)
            return response

        except DomainException as exc:
            status_code = domain_status_code(exc)
            log = logger.error if status_code >= 500 else logger.warning
            log(f"Domain exception: {exc} | Code: {exc.internal_code} | {where}")

            hide = is_production() and exc.internal_code in SERVER_SIDE_CODES
            detail = "Erro interno ao processar a solicitação" if hide else str(exc)
            return error_response(status_code, exc.internal_code, detail, exc.details)

        except IntegrityError as exc:
            # Unique constraints are the backstop of the availability checks
            constraint_name = extract_constraint_name(str(exc))
            logger.error(f"Integrity error: Constraint={constraint_name or 'N/A'} | {where}")
            code = f"INTEGRITY_ERROR_{constraint_name}" if constraint_name else "INTEGRITY_ERROR"
            detail = "Database integrity error" if is_production() else str(exc)
            return error_response(status.HTTP_409_CONFLICT, code, detail)

        except NoResultFound as exc:
            logger.warning(f"Resource not found: {exc} | {where}")
            return error_response(status.HTTP_404_NOT_FOUND, "RESOURCE_NOT_FOUND", "Resource not found")

        except SQLAlchemyError as exc:
            logger.error(f"Database error: Type={type(exc).__name__} | {where}")
            detail = "Internal database error" if is_production() else str(exc)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "DATABASE_ERROR", detail)

        except ValueError as exc:
            logger.warning(f"Validation error: {exc} | {where}")
            return error_response(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", str(exc))

        except Exception as exc:
            logger.exception(f"Unhandled exception: Type={type(exc).__name__} | {where}")
            detail = "Internal server error" if is_production() else str(exc)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", detail)
