# devlog/services/_shared/base.py
from __future__ import annotations

from collections.abc import Iterable

from devlog.repositories.base import PageRequest
from devlog.services._shared.errors import AuthorizationError
from devlog.services._shared.policies.common import is_owner
from devlog.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared validation helpers (pagination, ownership).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session; always use a Unit of Work.
    - Service errors are translated to HTTP by ``devlog.core.errors``.
    """

    #: Upper bound for any page size requested through a service.
    MAX_PAGE_SIZE = 20

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work (flushes are blocked).

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, size: int, sort: Iterable[str] | None = None
    ) -> PageRequest:
        """
        Build a :class:`PageRequest` with basic clamping.

        :param page: 0-based page index (negative values become 0).
        :type page: int
        :param size: Page size, clamped to ``[1, MAX_PAGE_SIZE]``.
        :type size: int
        :param sort: Sort tokens like ``["-created_at", "title"]``.
        :type sort: Iterable[str] | None
        :rtype: PageRequest
        """
        return PageRequest.clamped(page, size, max_size=self.MAX_PAGE_SIZE, sort=sort or ())

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, actor_id: int | str | None, owner_id: int | str, *, msg: str | None = None) -> None:
        """
        Ensure the current actor is the resource owner. **actor_id** and
        **owner_id** must refer to the same kind of identifier.

        :param actor_id: Authenticated member id.
        :param owner_id: Expected owner id.
        :param msg: Optional custom error message.
        :type msg: str | None
        :raises AuthorizationError: If actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "You can only modify your own resources.")
