"""
Portfolio - Custom Exceptions and Exception Handlers
"""
import structlog
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from werkzeug.exceptions import HTTPException

from portfolio.api_responses import ErrorCode

logger = structlog.get_logger('exceptions')


class PortfolioException(Exception):
    """Base exception for the portfolio API"""
    status_code = 400

    def __init__(self, message: str, code: str = "PORTFOLIO_ERROR", details=None):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(message)

    def to_dict(self):
        payload = {
            'error': True,
            'code': self.code,
            'message': self.message
        }
        if self.details:
            payload['details'] = self.details
        return payload


class NotFoundException(PortfolioException):
    """Requested entity does not exist"""
    status_code = 404

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.NOT_FOUND)
        logger.info(f"Not found: {message}")


class ValidationException(PortfolioException):
    """Validation-related exceptions"""
    status_code = 400

    def __init__(self, message: str, field: str = None):
        details = {'field': field} if field else None
        super().__init__(message, code=ErrorCode.VALIDATION_ERROR, details=details)
        self.field = field
        logger.warning(f"Validation error: {message}")


class ConflictException(PortfolioException):
    """Unique constraint violations"""
    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.CONFLICT)
        logger.warning(f"Conflict: {message}")


class DatabaseException(PortfolioException):
    """Database-related exceptions"""
    status_code = 500

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message, code=ErrorCode.DATABASE_ERROR)
        self.cause = cause
        logger.error(f"Database error: {message}")


class StoreUnavailableException(DatabaseException):
    """The database could not be reached"""
    status_code = 503

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message, cause=cause)
        self.code = ErrorCode.STORE_UNAVAILABLE


class UploadException(PortfolioException):
    """Upload backend failures"""
    status_code = 502

    def __init__(self, message: str, backend: str = None):
        super().__init__(message, code=ErrorCode.UPLOAD_ERROR)
        self.backend = backend
        logger.error(f"Upload error: {message}", backend=backend)


# SQLSTATE 23505 on PostgreSQL, message text on SQLite
UNIQUE_VIOLATION_SQLSTATE = "23505"
UNIQUE_VIOLATION_MARKERS = ("UNIQUE constraint failed", "duplicate key value")


def is_unique_violation(error):
    orig = getattr(error, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    return any(marker in str(orig) for marker in UNIQUE_VIOLATION_MARKERS)


def translate_store_error(error, conflict_message="Resource already exists"):
    """Map a SQLAlchemy error to the portfolio exception reported to clients."""
    if isinstance(error, IntegrityError):
        if is_unique_violation(error):
            logger.warning(f"Integrity error: {error.orig}")
            return ConflictException(conflict_message)
        return ValidationException(f"Invalid data: {error.orig}")
    if isinstance(error, OperationalError):
        return StoreUnavailableException(f"Database unavailable: {error.orig}", cause=error)
    return DatabaseException(str(error), cause=error)


def handle_portfolio_exception(e):
    return e.to_dict(), e.status_code


def handle_store_error(e):
    return handle_portfolio_exception(translate_store_error(e))


def handle_http_exception(e):
    return {
        'error': True,
        'code': e.name.upper().replace(' ', '_'),
        'message': e.description
    }, e.code


def handle_generic_exception(e):
    logger.error(f"Unhandled exception: {e}", exc_info=True)
    return {
        'error': True,
        'code': ErrorCode.INTERNAL_ERROR,
        'message': 'An unexpected error occurred'
    }, 500


def register_exception_handlers(app, api=None):
    """Register exception handlers with the Flask app and the REST API"""
    handlers = [
        (PortfolioException, handle_portfolio_exception),
        (SQLAlchemyError, handle_store_error),
        (HTTPException, handle_http_exception),
        (Exception, handle_generic_exception),
    ]

    for exc_class, handler in handlers:
        app.register_error_handler(exc_class, handler)
        if api is not None:
            # flask-restx answers errors raised under its routes itself; it
            # takes the first matching handler, so the most specific goes first
            api.errorhandler(exc_class)(handler)
