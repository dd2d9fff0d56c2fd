"""Generic base repository with reusable CRUD and upsert operations."""

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import func, inspect
from sqlalchemy.orm import Session

from dealer_reports.database import Base, dialect_insert

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Thin data-access layer over SQLAlchemy.

    Subclasses add domain-specific queries.
    Repositories only modify the session (add/delete/flush/execute) - the
    caller controls when to commit or rollback, so the orchestrator can
    wrap the day/month/year upserts in one transaction.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self._key_columns = [c.name for c in inspect(model).primary_key]

    # ── reads ────────────────────────────────────────────────────────

    def get(self, key: Any) -> Optional[T]:
        """Fetch by primary key (a scalar, or a tuple for composite keys)."""
        return self.db.get(self.model, key)

    def count(self) -> int:
        return self.db.query(self.model).count()

    def exists(self, key: Any) -> bool:
        return self.get(key) is not None

    # ── writes ───────────────────────────────────────────────────────

    def create(self, obj: T) -> T:
        """Add object to session (caller must commit)."""
        self.db.add(obj)
        self.db.flush()  # Assigns ID without committing
        return obj

    def update(self, obj: T) -> T:
        """Flush pending attribute changes (caller must commit)."""
        self.db.flush()
        return obj

    def delete(self, key: Any) -> bool:
        """Mark object for deletion (caller must commit)."""
        obj = self.get(key)
        if obj:
            self.db.delete(obj)
            self.db.flush()
            return True
        return False

    def upsert(self, key: Dict[str, Any], values: Dict[str, Any]) -> T:
        """Insert the row for *key* or overwrite every column in *values*.

        Runs as a single ``INSERT ... ON CONFLICT DO UPDATE`` where the
        dialect supports it, so concurrent writers on the same key never
        leave a half-written row; the last writer wins.  Columns not named
        in *values* keep their stored value on update.
        """
        if sorted(key) != sorted(self._key_columns):
            raise ValueError(f"upsert key {sorted(key)} does not match primary key {self._key_columns}")

        insert = dialect_insert(self.db)
        if insert is None:
            obj = self.db.merge(self.model(**key, **values))
            self.db.flush()
            return obj

        stmt = insert(self.model).values(**key, **values)
        update_set = dict(values)
        if "updated_at" in self.model.__table__.c:
            update_set["updated_at"] = func.now()
        stmt = stmt.on_conflict_do_update(index_elements=self._key_columns, set_=update_set)
        self.db.execute(stmt)

        identity = tuple(key[c] for c in self._key_columns)
        return self.db.get(
            self.model,
            identity if len(identity) > 1 else identity[0],
            populate_existing=True,
        )
