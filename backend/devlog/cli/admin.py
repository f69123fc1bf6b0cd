"""Flask CLI command for bootstrapping an administrator account."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from devlog.services.auth.dto import Role
from devlog.services.members import policies
from devlog.services.members.service import MemberService
from devlog.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)


@click.command("create-admin")
@click.argument("email")
@click.password_option(help="Password for a new account (ignored when promoting).")
@with_appcontext
def create_admin_command(email: str, password: str) -> None:
    """Create an ADMIN member, or promote the member already using EMAIL."""
    if not policies.is_valid_email(email):
        raise click.BadParameter("Invalid email format.", param_hint="EMAIL")

    with SQLAlchemyUnitOfWork() as uow:
        member = uow.members.get_by_email(email)
        if member is not None:
            uow.members.update(member, role=Role.ADMIN.value)
            click.echo(f"Promoted {member.username} to ADMIN.")
            return

        if not policies.is_valid_password(password):
            raise click.BadParameter(
                "Password does not meet the password policy.",
                param_hint="--password",
            )
        member = uow.members.model(
            email=email,
            password=password,
            username=MemberService.generate_username(uow.members),
            role=Role.ADMIN.value,
        )
        uow.members.add(member)
        click.echo(f"Created ADMIN {member.username} ({member.uuid}).")
    LOGGER.info("cli.admin_created")
