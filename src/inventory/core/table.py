from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, select

from inventory.core.errors import NotFoundError, StorageError
from inventory.core.updates import ATTRIBUTE_EXISTS_ID, UpdateSpec
from inventory.models.schema import ItemRow

__all__ = ["ItemTable"]


class ItemTable:
    """
    Key-value access to the items table, keyed by ``id``.

    Rows go in and come out as plain dicts of stored (encrypted) values.
    Each call is its own transaction.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def put(self, row: dict[str, str]) -> None:
        """Unconditional write of a full row."""
        try:
            with Session(self.engine) as session:
                session.merge(ItemRow(**row))
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"put failed for {row.get('id')}") from e

    def scan(self) -> list[dict[str, str]]:
        try:
            with Session(self.engine) as session:
                return [item.to_row() for item in session.exec(select(ItemRow)).all()]
        except SQLAlchemyError as e:
            raise StorageError("scan failed") from e

    def update(self, item_id: str, spec: UpdateSpec) -> dict[str, str]:
        """Apply ``spec`` to an existing row and return the row after the update."""
        if spec.condition != ATTRIBUTE_EXISTS_ID:
            raise ValueError(f"Unsupported update condition: {spec.condition}")

        try:
            with Session(self.engine) as session:
                item = session.get(ItemRow, item_id)
                if item is None:
                    raise NotFoundError(item_id)

                for column, value in spec.resolved().items():
                    setattr(item, column, value)

                session.add(item)
                session.commit()
                session.refresh(item)
                return item.to_row()
        # Row deleted between the read and the write
        except StaleDataError as e:
            raise NotFoundError(item_id) from e
        except SQLAlchemyError as e:
            raise StorageError(f"update failed for {item_id}") from e

    def delete(self, item_id: str) -> dict[str, str] | None:
        """Remove a row, returning what was stored or None if it was absent."""
        try:
            with Session(self.engine) as session:
                item = session.get(ItemRow, item_id)
                if item is None:
                    return None

                old_row = item.to_row()
                session.delete(item)
                session.commit()
                return old_row
        except SQLAlchemyError as e:
            raise StorageError(f"delete failed for {item_id}") from e
