# workforce_api/common/auth.py
from __future__ import annotations

from functools import wraps

from flask import current_app
from flask_jwt_extended import (
    create_access_token, set_access_cookies, unset_jwt_cookies,
    verify_jwt_in_request, current_user,
)

from workforce_api.common.errors import Unauthenticated, Forbidden
from workforce_api.common.http import fail
from workforce_api.extensions import db, jwt
from workforce_api.models.user import User
from workforce_api.permissions import has_any_perm


# ---------- JWT wiring ----------

def register_jwt_callbacks(manager=jwt):
    """Resolve the token identity to a User and keep every failure a 401 envelope."""

    @manager.user_identity_loader
    def _identity(user):
        return str(user.id) if isinstance(user, User) else str(user)

    @manager.additional_claims_loader
    def _claims(user):
        if isinstance(user, User):
            return {"role": user.role}
        return {}

    @manager.user_lookup_loader
    def _lookup(_jwt_header, jwt_data):
        ident = jwt_data.get("sub")
        if not str(ident).isdigit():
            return None
        return db.session.get(User, int(ident))

    @manager.user_lookup_error_loader
    def _user_not_found(_jwt_header, _jwt_data):
        return fail("User not found", status=401, code="auth.user_not_found")

    @manager.unauthorized_loader
    def _no_token(_reason):
        return fail("No token, authorization denied", status=401, code="auth.no_token")

    @manager.invalid_token_loader
    def _invalid(_reason):
        return fail("Token is not valid", status=401, code="auth.invalid_token")

    @manager.expired_token_loader
    def _expired(_jwt_header, _jwt_payload):
        return fail("Token has expired", status=401, code="auth.token_expired")


# ---------- session ----------

def authenticate(email, password) -> User:
    # wrong-typed credentials are just bad credentials
    if not isinstance(email, str) or not isinstance(password, str):
        raise Unauthenticated("Invalid credentials", code="auth.invalid_credentials")
    email = email.strip().lower()
    u = User.query.filter_by(email=email).first() if email else None
    if not u or not u.check_password(password):
        raise Unauthenticated("Invalid credentials", code="auth.invalid_credentials")
    return u


def start_session(response, user: User):
    token = create_access_token(identity=user)
    # cookie lives exactly as long as the token it carries
    max_age = int(current_app.config["JWT_ACCESS_TOKEN_EXPIRES"].total_seconds())
    set_access_cookies(response, token, max_age=max_age)
    current_app.logger.info("session started user=%s role=%s", user.id, user.role)
    return response


def end_session(response):
    unset_jwt_cookies(response)
    return response


# ---------- decorators ----------

def login_required(fn):
    @wraps(fn)
    def inner(*args, **kwargs):
        verify_jwt_in_request()
        return fn(*args, **kwargs)
    return inner


def requires_perms(*perm_codes: str):
    """
    Require that the current user's role grants ANY of the given permission codes.
    Authentication always runs first, so no handler body executes for an
    anonymous or unknown caller.
    """
    def outer(fn):
        @wraps(fn)
        def inner(*args, **kwargs):
            verify_jwt_in_request()
            user = current_user
            if not has_any_perm(user.role, perm_codes):
                current_app.logger.warning(
                    "RBAC deny user=%s role=%s needs=%s",
                    user.id, user.role, ",".join(perm_codes),
                )
                raise Forbidden("Access denied")
            return fn(*args, **kwargs)
        return inner
    return outer
