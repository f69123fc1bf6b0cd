"""Generic repository base and query utilities for SQLAlchemy 2.x.

Persistence-only concerns shared by all repositories:

- Zero-based page requests with clamped sizes and page metadata.
- Safe sorting through a whitelist mapping with a primary-key tiebreaker.
- Safe updates through a per-repository updatable-field whitelist.
- No business logic, no commit/rollback; services own transactions.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, func, literal, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from devlog.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


# ------------------------------- Pagination ----------------------------------


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Pagination input parameters.

    :param page: 0-based page index (clamped to ``>= 0``).
    :type page: int
    :param size: Page size (clamped to ``[1, max_size]`` by the caller).
    :type size: int
    :param sort: Public sort tokens (e.g., ``["-created_at", "-id"]``).
    :type sort: tuple[str, ...]
    """

    page: int
    size: int
    sort: tuple[str, ...] = ()

    @classmethod
    def clamped(
        cls, page: int, size: int, *, max_size: int, sort: Iterable[str] = ()
    ) -> PageRequest:
        """Build a request with ``page >= 0`` and ``1 <= size <= max_size``."""
        return cls(
            page=max(0, int(page)),
            size=min(max(1, int(size)), max_size),
            sort=tuple(sort),
        )

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True, slots=True)
class Page(Generic[E]):
    """Result page with metadata.

    :param items: Entities in the current page.
    :param total: Total matching rows.
    :param page: 0-based page index.
    :param size: Requested page size.
    """

    items: Sequence[E]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.size - 1) // self.size if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0


# ----------------------------- Sorting utilities -----------------------------


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Parse public sort tokens into ``(field, is_desc)`` tuples."""
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        field = (token[1:] if is_desc else token).strip()
        if field:
            parsed.append((field, is_desc))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply ``ORDER BY`` clauses from whitelisted tokens.

    Unknown tokens are ignored. The primary key is appended as a final
    tiebreaker unless a token already ordered by it.

    :param stmt: Base selectable.
    :param sortable_fields: Public field → SQLAlchemy attribute mapping.
    :param tokens: Public sort tokens (e.g., ``["-created_at"]``).
    :param pk_attr: Primary-key attribute used as a tiebreaker.
    :returns: Modified select with ``ORDER BY`` clauses.
    """
    orders: list[Any] = []
    pk_sorted = False
    for field, is_desc in parse_sort_tokens(tokens):
        col = sortable_fields.get(field)
        if isinstance(col, InstrumentedAttribute):
            orders.append(col.desc() if is_desc else col.asc())
            pk_sorted = pk_sorted or (pk_attr is not None and col is pk_attr)

    if orders:
        stmt = stmt.order_by(*orders)
    if pk_attr is not None and not pk_sorted:
        stmt = stmt.order_by(pk_attr.asc())
    return stmt


def paginate_select(
    session: Session, stmt: Select[Any], request: PageRequest
) -> tuple[list[Any], int]:
    """Execute a select for one page and count all matching rows.

    The statement's ``ORDER BY`` is stripped for the ``COUNT``.

    :returns: Tuple of ``(items, total)``.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())
    sliced = stmt.limit(request.size).offset(request.offset)
    items = list(session.execute(sliced).scalars().all())
    return items, total


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model`` and MAY override ``_sortable_fields``,
    ``_updatable_fields`` and ``_default_eagerload``.

    This class never opens, commits or rolls back transactions.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Bind the repository to a session.

        :param session: Session shared across the Unit of Work scope; falls
            back to the Flask-scoped session when omitted.
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Attach eager-loading options to generic get/list operations."""
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        """Whitelist of keys :meth:`update` may assign (fail-closed when empty)."""
        return set()

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize the PK."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        stmt: Select[Any] = select(literal(1)).select_from(self.model).filter_by(**filters)
        return bool(self.session.execute(stmt.limit(1)).scalar())

    def delete(self, instance: E) -> None:
        """Hard-delete an entity and flush."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def update(self, instance: E, **fields: Any) -> E:
        """Assign whitelisted keys (triggering ``@validates``) and flush.

        :raises ValueError: On keys outside :meth:`_updatable_fields`.
        """
        allowed = self._updatable_fields()
        unknown = [k for k in fields if k not in allowed]
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for key, value in fields.items():
            setattr(instance, key, value)
        self.flush()
        return instance

    # ------------------------------- Listing ---------------------------------

    def paginate(self, request: PageRequest, stmt: Select[Any] | None = None) -> Page[E]:
        """Return one sorted page of entities.

        :param request: Page index, size and sort tokens.
        :param stmt: Optional pre-filtered select; defaults to all rows.
        """
        base = stmt if stmt is not None else select(self.model)
        base = self._default_eagerload(base)
        base = apply_sorting(base, self._sortable_fields(), request.sort, pk_attr=self._pk_attr())
        items, total = paginate_select(self.session, base, request)
        return Page(items=cast(list[E], items), total=total, page=request.page, size=request.size)
