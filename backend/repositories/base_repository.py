"""
Base repository providing common persistence operations.

Repositories hand out fully hydrated domain objects and write them back on
save(). Entities loaded with get_for_update() or registered with add() are
tracked for the lifetime of the repository (one request) and synchronized
onto their rows when save() is called.
"""

from datetime import datetime, timezone
from typing import Dict, Generic, List, Optional, Tuple, Type, TypeVar
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from exceptions import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar('T')  # ORM model
E = TypeVar('E')  # Domain entity


def to_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Convert to the naive UTC value stored in the database."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def from_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Re-attach UTC to a naive database value."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_db_id(value) -> Optional[str]:
    return str(value) if value is not None else None


class BaseRepository(Generic[T, E]):
    """
    Generic base repository mapping one ORM model to one domain entity.
    All specific repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model
        self._tracked: Dict[str, Tuple[E, T]] = {}

    def to_domain(self, row: T) -> E:
        """Build a domain entity from a row (and its loaded children)."""
        raise NotImplementedError

    def apply(self, entity: E, row: T) -> None:
        """Copy entity state onto a row, including child rows."""
        raise NotImplementedError

    def _find_row(self, id: UUID | str, include_disabled: bool = False, for_update: bool = False) -> Optional[T]:
        query = self.db.query(self.model).filter(self.model.id == to_db_id(id))
        if not include_disabled:
            query = query.filter(self.model.enabled.is_(True))
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get(self, id: UUID | str, include_disabled: bool = False) -> Optional[E]:
        """
        Retrieve an entity by its ID for reading.

        Args:
            id: Entity id
            include_disabled: Also return soft-deleted records

        Returns:
            Domain entity or None if not found
        """
        row = self._find_row(id, include_disabled)
        return self.to_domain(row) if row is not None else None

    def get_for_update(self, id: UUID | str, include_disabled: bool = False) -> Optional[E]:
        """
        Retrieve an entity that the caller intends to mutate and save.

        Returns:
            Tracked domain entity or None if not found
        """
        row = self._find_row(id, include_disabled, for_update=True)
        if row is None:
            return None
        entity = self.to_domain(row)
        self._tracked[str(entity.id)] = (entity, row)
        return entity

    def add(self, entity: E) -> E:
        """
        Register a new entity; it is inserted on the next save().

        Args:
            entity: Domain entity to persist

        Returns:
            The same entity
        """
        row = self.model(id=str(entity.id))
        self.apply(entity, row)
        self.db.add(row)
        self._tracked[str(entity.id)] = (entity, row)
        return entity

    def save(self) -> None:
        """
        Write every tracked entity back to its row and commit.

        Raises:
            DatabaseError: If the commit fails; the session is rolled back
        """
        for entity, row in self._tracked.values():
            self.apply(entity, row)
        self._commit(f"save {self.model.__tablename__}")

    def _commit(self, operation: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error during {operation}: {e}", exc_info=True)
            raise DatabaseError(operation, f"Failed to {operation}")

    def exists(self, id: UUID | str, include_disabled: bool = False) -> bool:
        """
        Check if a record exists by ID.

        Returns:
            True if exists, False otherwise
        """
        query = self.db.query(self.model.id).filter(self.model.id == to_db_id(id))
        if not include_disabled:
            query = query.filter(self.model.enabled.is_(True))
        return query.first() is not None

    @staticmethod
    def paginate(query: Query, page: int, page_size: int) -> Tuple[List[T], int]:
        """
        Apply skip/take paging to a query.

        Returns:
            Tuple of (rows on the requested page, total matching rows)
        """
        total = query.order_by(None).count()
        rows = query.offset((page - 1) * page_size).limit(page_size).all()
        return rows, total
