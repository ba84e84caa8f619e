# workforce_api/common/errors.py
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from workforce_api.common.http import fail


class APIError(Exception):
    """Base for errors that map straight onto a JSON failure envelope."""
    status_code = 400
    default_code = None

    def __init__(self, message, code=None, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload


class Unauthenticated(APIError):
    status_code = 401
    default_code = "auth.unauthenticated"


class Forbidden(APIError):
    status_code = 403
    default_code = "auth.forbidden"


class NotFound(APIError):
    status_code = 404
    default_code = "not_found"


class Conflict(APIError):
    # duplicate email, duplicate check-in, out-of-order leave decision
    status_code = 400
    default_code = "conflict"


class ValidationError(APIError):
    status_code = 422
    default_code = "validation.invalid"


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def _api_error(e: APIError):
        return fail(message=e.message, status=e.status_code, code=e.code, detail=e.payload)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(IntegrityError)
    def _integrity(e: IntegrityError):
        from workforce_api.extensions import db
        db.session.rollback()
        app.logger.warning("integrity error: %s", getattr(e, "orig", e))
        return fail("Duplicate or constraint failed", status=400, code="conflict.constraint")

    @app.errorhandler(Exception)
    def _500(e: Exception):
        app.logger.exception(e)
        return fail("Internal server error", status=500)
