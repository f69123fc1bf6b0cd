"""Member account, session and password-reset endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from devlog.api.deps import (
    current_access_token,
    current_identity,
    empty_response,
    json_response,
    member_service,
    require_auth,
    timing,
)
from devlog.core.extensions import limiter
from devlog.schemas import (
    EmailQuerySchema,
    LoginSchema,
    MemberSchema,
    PasswordCheckSchema,
    PasswordConfirmSchema,
    RefreshSchema,
    ResetConfirmSchema,
    ResetRequestSchema,
    ResetTokenSchema,
    ResetVerifyQuerySchema,
    SignupResponseSchema,
    SignupSchema,
    TokenPairSchema,
    UsernameUpdateSchema,
)
from devlog.services.members.dto import LoginIn, SignupIn

bp = Blueprint("members", __name__)

signup_schema = SignupSchema()
signup_response_schema = SignupResponseSchema()
login_schema = LoginSchema()
email_query_schema = EmailQuerySchema()
password_check_schema = PasswordCheckSchema()
password_confirm_schema = PasswordConfirmSchema()
refresh_schema = RefreshSchema()
username_schema = UsernameUpdateSchema()
member_schema = MemberSchema()
token_schema = TokenPairSchema()
reset_request_schema = ResetRequestSchema()
reset_verify_schema = ResetVerifyQuerySchema()
reset_confirm_schema = ResetConfirmSchema()
reset_token_schema = ResetTokenSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


def _json_body() -> dict:
    return request.get_json(silent=True) or {}


# ------------------------------ Public --------------------------------------


@bp.post("/signup")
@timing
def signup():
    """Register a member and return their first session."""

    data = signup_schema.load(_json_body())
    out = member_service().sign_up(SignupIn(email=data["email"], password=data["password"]))
    body = signup_response_schema.dump(
        {
            "uuid": out.uuid,
            "email": out.email,
            "username": out.username,
            "access_token": out.tokens.access_token,
            "refresh_token": out.tokens.refresh_token,
        }
    )
    return json_response(body, status=201)


@bp.get("/check-email")
@timing
def check_email():
    """Tell whether an email is well-formed and still free."""

    data = email_query_schema.load(request.args)
    available = member_service().is_email_valid_and_available(data["email"])
    return json_response({"available": available})


@bp.post("/password/validate")
@timing
def validate_password():
    data = password_check_schema.load(_json_body())
    return json_response({"isValid": member_service().validate_password(data["password"])})


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and issue a session."""

    data = login_schema.load(_json_body())
    tokens = member_service().login(LoginIn(email=data["email"], password=data["password"]))
    return json_response(token_schema.dump(tokens))


@bp.post("/token/refresh")
@timing
def refresh_token():
    """Exchange the current refresh token for a new pair."""

    data = refresh_schema.load(_json_body())
    tokens = member_service().refresh(data["refresh_token"])
    return json_response(token_schema.dump(tokens))


# ------------------------------ Authenticated -------------------------------


@bp.post("/logout")
@require_auth
@timing
def logout():
    identity = current_identity()
    member_service().logout(identity.subject, current_access_token())
    return empty_response()


@bp.delete("/unregister")
@require_auth
@timing
def unregister():
    """Delete the caller's account after re-checking the password."""

    data = password_confirm_schema.load(_json_body())
    identity = current_identity()
    member_service().unregister(identity.subject, current_access_token(), data["password"])
    return empty_response()


@bp.patch("/update-username")
@require_auth
@timing
def update_username():
    data = username_schema.load(_json_body())
    member = member_service().update_username(current_identity().subject, data["new_username"])
    return json_response(member_schema.dump(member))


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated member's profile."""

    member = member_service().get_profile(current_identity().subject)
    return json_response(member_schema.dump(member))


# ------------------------------ Password reset ------------------------------


@bp.post("/password-reset/request")
@timing
def request_password_reset():
    """Mail a reset link to the account's address."""

    data = reset_request_schema.load(_json_body())
    member_service().request_password_reset(data["email"])
    return empty_response(202)


@bp.post("/password-reset/issue")
@require_auth
@timing
def issue_password_reset():
    """Return a reset token to an authenticated member."""

    data = password_confirm_schema.load(_json_body())
    token = member_service().issue_password_reset(current_identity().subject, data["password"])
    return json_response(reset_token_schema.dump({"reset_token": token}))


@bp.get("/password-reset/verify")
@timing
def verify_password_reset():
    data = reset_verify_schema.load(request.args)
    return json_response(member_service().verify_password_reset_token(data["reset_token"]))


@bp.post("/password-reset/confirm")
@timing
def confirm_password_reset():
    """Set a new password with a live reset token."""

    data = reset_confirm_schema.load(_json_body())
    member_service().confirm_password_reset(data["reset_token"], data["new_password"])
    return empty_response()
