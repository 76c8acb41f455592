"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from devconnector.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class UserRepository(BaseRepository[User]):
            model = User

        repo = UserRepository(session)
        user = repo.get_by_id(user_id)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: str) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def delete(self, id: str) -> bool:
        """Delete a record by ID. Returns False if nothing matched."""
        deleted = (
            self.session.query(self.model)
            .filter(self.model.id == id)  # type: ignore[attr-defined]
            .delete(synchronize_session=False)
        )
        self.session.flush()
        return bool(deleted)
