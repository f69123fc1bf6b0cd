"""
MemberService
=============

Application service for the `Member` aggregate and its sessions:

- Signup, login, logout, unregister
- Username updates and email/password checks
- Refresh-token rotation
- Password-reset request / issue / verify / confirm

Token issuance and revocation are delegated to :class:`TokenService`; this
service never signs or stores tokens itself.
"""

from __future__ import annotations

import logging
import secrets

from sqlalchemy.exc import IntegrityError

from devlog.models.member import Member
from devlog.repositories.member import MemberRepository
from devlog.services._shared.base import BaseService
from devlog.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    SessionNotFound,
    TokenInvalid,
    violates,
)
from devlog.services._shared.ports.mail_sender import MailMessage, MailSender
from devlog.services.auth.dto import Role, TokenPair
from devlog.services.auth.service import TokenService
from devlog.services.members import policies
from devlog.services.members.dto import LoginIn, MemberOut, SignupIn, SignupOut

logger = logging.getLogger(__name__)

RESET_MAIL_SUBJECT = "Password Reset Request"
USERNAME_PATTERN = "User-%06d"


def _to_member_out(member: Member) -> MemberOut:
    return MemberOut(
        uuid=member.uuid,
        email=member.email,
        username=member.username,
        role=member.role,
        created_at=member.created_at,
    )


class MemberService(BaseService):
    """
    Account and session use-cases.

    Responsibilities
    ----------------
    - Register members with a generated, unique username.
    - Authenticate credentials and hand out sessions.
    - End sessions (logout/unregister) so the access token stops working.
    - Drive the password-reset flow end to end.
    """

    def __init__(
        self,
        *,
        tokens: TokenService,
        mail: MailSender,
        reset_url: str,
    ) -> None:
        """
        :param tokens: Token lifecycle service.
        :param mail: Outbound mail port used by the password-reset flow.
        :param reset_url: Front-end page receiving ``?token=<resetToken>``.
        """
        self.tokens = tokens
        self.mail = mail
        self.reset_url = reset_url

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def sign_up(self, dto: SignupIn) -> SignupOut:
        """
        Register a member and open their first session.

        :param dto: Signup input DTO.
        :type dto: SignupIn
        :returns: Public member data plus the new token pair.
        :rtype: SignupOut
        :raises ServiceError: When the email or password is rejected by policy.
        :raises ConflictError: When the email is already registered.
        """
        if not policies.is_valid_email(dto.email):
            raise ServiceError("Invalid email format")
        if not policies.is_valid_password(dto.password):
            raise ServiceError("Password does not meet the password policy")

        with self.rw_uow() as uow:
            repo: MemberRepository = uow.members
            if repo.exists_by_email(dto.email):
                raise ConflictError("Member", "email already in use")

            member = repo.model(
                email=dto.email,
                password=dto.password,
                username=self.generate_username(repo),
                role=Role.USER.value,
            )
            try:
                repo.add(member)
            except IntegrityError as exc:
                if violates(exc, "uq_members_email") or violates(exc, "members.email"):
                    raise ConflictError("Member", "email already in use") from exc
                if violates(exc, "uq_members_username") or violates(exc, "members.username"):
                    raise ConflictError("Member", "username already in use") from exc
                raise

            logger.info("member.signed_up", extra={"subject": member.uuid})
            tokens = self.tokens.issue_session(member.uuid, Role.USER)
            return SignupOut(
                uuid=member.uuid,
                email=member.email,
                username=member.username,
                tokens=tokens,
            )

    @staticmethod
    def generate_username(repo: MemberRepository) -> str:
        """Pick a free ``User-NNNNNN`` name."""
        while True:
            candidate = USERNAME_PATTERN % secrets.randbelow(1_000_000)
            if not repo.exists_by_username(candidate):
                return candidate

    def is_email_valid_and_available(self, email: str | None) -> bool:
        """
        Return True when ``email`` is well-formed and not registered yet.

        :param email: Candidate email.
        :type email: str | None
        :rtype: bool
        """
        if not policies.is_valid_email(email):
            logger.info("member.email_rejected")
            return False
        with self.ro_uow() as uow:
            return not uow.members.exists_by_email(email)

    def validate_password(self, password: str | None) -> bool:
        return policies.is_valid_password(password)

    # --------------------------------------------------------------------- #
    # Sessions
    # --------------------------------------------------------------------- #

    def login(self, dto: LoginIn) -> TokenPair:
        """
        Authenticate by email/password and issue a session.

        :raises AuthenticationError: Same error for an unknown email and a
            wrong password.
        """
        with self.ro_uow() as uow:
            member = uow.members.authenticate(dto.email, dto.password)
            if member is None:
                logger.warning("member.login_failed")
                raise AuthenticationError()
            subject, role = member.uuid, Role.parse(member.role)

        return self.tokens.issue_session(subject, role)

    def refresh(self, refresh_token: str) -> TokenPair:
        """
        Rotate a refresh token into a new pair.

        :param refresh_token: The refresh token on record.
        :raises SessionNotFound: Token not on record or member deleted.
        """

        def current_role(subject: str) -> Role:
            with self.ro_uow() as uow:
                member = uow.members.get_by_uuid(subject)
                if member is None:
                    raise SessionNotFound()
                return Role.parse(member.role)

        return self.tokens.rotate_refresh(refresh_token, current_role)

    def logout(self, subject: str, access_token: str | None) -> None:
        self.tokens.revoke_session(subject, access_token)
        logger.info("member.logged_out", extra={"subject": subject})

    def unregister(self, subject: str, access_token: str | None, password: str) -> None:
        """
        Delete the caller's account and end its session.

        Posts are removed with the member.

        :param subject: Member UUID from the access token.
        :param access_token: The raw bearer token to blacklist.
        :param password: Current password, re-checked before deleting.
        :raises AuthenticationError: On password mismatch.
        :raises NotFoundError: If the member no longer exists.
        """
        with self.rw_uow() as uow:
            member = uow.members.get_by_uuid(subject)
            if member is None:
                raise NotFoundError("Member", subject)
            if not member.verify_password(password):
                raise AuthenticationError("Invalid password")
            uow.members.delete(member)
            self.tokens.revoke_session(subject, access_token)
        logger.info("member.unregistered", extra={"subject": subject})

    # --------------------------------------------------------------------- #
    # Profile
    # --------------------------------------------------------------------- #

    def get_profile(self, subject: str) -> MemberOut:
        """
        :raises NotFoundError: If the member does not exist.
        """
        with self.ro_uow() as uow:
            member = uow.members.get_by_uuid(subject)
            if member is None:
                raise NotFoundError("Member", subject)
            return _to_member_out(member)

    def update_username(self, subject: str, new_username: str) -> MemberOut:
        """
        Change the caller's username.

        :param subject: Member UUID.
        :param new_username: 3-20 characters of ``[A-Za-z0-9_-]``.
        :raises ServiceError: When the username format is invalid.
        :raises ConflictError: When another member already uses it.
        :raises NotFoundError: If the member does not exist.
        """
        if not policies.is_valid_username(new_username):
            raise ServiceError("Invalid username format")

        with self.rw_uow() as uow:
            repo: MemberRepository = uow.members
            member = repo.get_by_uuid(subject)
            if member is None:
                raise NotFoundError("Member", subject)
            if member.username == new_username:
                return _to_member_out(member)
            if repo.exists_by_username(new_username):
                raise ConflictError("Member", "username already in use")
            try:
                repo.update(member, username=new_username)
            except IntegrityError as exc:
                if violates(exc, "uq_members_username") or violates(exc, "members.username"):
                    raise ConflictError("Member", "username already in use") from exc
                raise
            return _to_member_out(member)

    # --------------------------------------------------------------------- #
    # Password reset
    # --------------------------------------------------------------------- #

    def request_password_reset(self, email: str) -> None:
        """
        Mail a reset link to a registered address.

        :param email: Address of the account.
        :raises NotFoundError: When no account uses ``email``.
        """
        with self.ro_uow() as uow:
            member = uow.members.get_by_email(email)
            if member is None:
                raise NotFoundError("Member", "no account found with the provided email")
            subject, address = member.uuid, member.email

        token = self.tokens.issue_password_reset_token(subject)
        link = f"{self.reset_url}?token={token}"
        self.mail.send(
            MailMessage(
                to=address,
                subject=RESET_MAIL_SUBJECT,
                body="To reset your password, click the link below:\n" + link,
            )
        )
        logger.info("member.password_reset_requested", extra={"subject": subject})

    def issue_password_reset(self, subject: str, password: str) -> str:
        """
        Hand a reset token directly to an authenticated member.

        :param subject: Member UUID from the access token.
        :param password: Current password, re-checked.
        :returns: The reset token (supersedes any earlier one).
        :raises AuthenticationError: On password mismatch or unknown member.
        """
        with self.ro_uow() as uow:
            member = uow.members.get_by_uuid(subject)
            if member is None or not member.verify_password(password):
                raise AuthenticationError("Invalid password")

        return self.tokens.issue_password_reset_token(subject)

    def verify_password_reset_token(self, token: str | None) -> bool:
        if not token:
            return False
        return self.tokens.validate_password_reset_token(token)

    def confirm_password_reset(self, token: str, new_password: str) -> None:
        """
        Set a new password using a live reset token.

        The member's refresh session is ended; access tokens already issued
        run until they expire.

        :raises TokenInvalid: Token expired, forged, or superseded.
        :raises ServiceError: When the new password fails the policy.
        :raises NotFoundError: If the member was deleted meanwhile.
        """
        if not self.tokens.validate_password_reset_token(token):
            raise TokenInvalid()
        if not policies.is_valid_password(new_password):
            raise ServiceError("Password does not meet the password policy")

        subject = self.tokens.codec.subject_of(token)
        with self.rw_uow() as uow:
            repo: MemberRepository = uow.members
            member = repo.get_by_uuid(subject)
            if member is None:
                raise NotFoundError("Member", subject)
            repo.update(member, password=new_password)
            self.tokens.consume_password_reset(subject)
        logger.info("member.password_reset", extra={"subject": subject})
