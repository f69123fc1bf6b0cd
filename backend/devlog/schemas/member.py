"""Member and session Marshmallow schemas.

JSON keys are camelCase (``accessToken``, ``newUsername``...); attribute
names stay snake_case through ``data_key``.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

# --------------------------------------------------------------------------- #
# Requests
# --------------------------------------------------------------------------- #


class SignupSchema(Schema):
    """Input payload for account registration.

    The password policy itself is enforced by the service.
    """

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1, max=128))


class LoginSchema(Schema):
    """Input payload for authenticating a member."""

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1, max=128))


class EmailQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default="")


class PasswordCheckSchema(Schema):
    password = fields.String(load_default="", load_only=True)


class RefreshSchema(Schema):
    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class PasswordConfirmSchema(Schema):
    """Current password, re-entered for unregister and reset issue."""

    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))


class UsernameUpdateSchema(Schema):
    new_username = fields.String(required=True, data_key="newUsername")


class ResetRequestSchema(Schema):
    email = fields.Email(required=True, validate=validate.Length(max=254))


class ResetVerifyQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    reset_token = fields.String(load_default="", data_key="resetToken")


class ResetConfirmSchema(Schema):
    reset_token = fields.String(
        required=True, data_key="resetToken", validate=validate.Length(min=1)
    )
    new_password = fields.String(
        required=True, load_only=True, data_key="newPassword", validate=validate.Length(min=1)
    )


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


class TokenPairSchema(Schema):
    """Response payload carrying a session."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class SignupResponseSchema(Schema):
    uuid = fields.String(required=True)
    email = fields.Email(required=True)
    username = fields.String(required=True)
    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class MemberSchema(Schema):
    """Public view of a member (``/me``, username update)."""

    uuid = fields.String(required=True)
    email = fields.Email(required=True)
    username = fields.String(required=True)
    role = fields.String(required=True)
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class ResetTokenSchema(Schema):
    reset_token = fields.String(required=True, data_key="resetToken")
