import uuid
from collections.abc import Mapping
from typing import Any

from inventory.core.codec import ENCRYPTED_FIELDS, Decrypted, Item, ItemCodec, Raw, coerce_field
from inventory.core.errors import NotFoundError, ValidationError
from inventory.core.table import ItemTable
from inventory.core.updates import build_update
from inventory.shared import Logger

__all__ = ["ItemStore"]

logger = Logger(__name__).get_logger()


class ItemStore:
    """
    Create, read, update and delete encrypted items.

    Every operation is independent; the table is the only point where
    concurrent requests meet. Encryption happens before anything is
    written and decryption after anything is read.
    """

    def __init__(self, table: ItemTable, codec: ItemCodec):
        self.table = table
        self.codec = codec

    def create(self, fields: Mapping[str, Any]) -> Item:
        missing = [name for name in ENCRYPTED_FIELDS if fields.get(name) is None]
        if missing or fields["name"] == "":
            logger.warning("Missing required fields: %s", missing or ["name"])
            raise ValidationError("Missing required fields: name, stock, price")

        item = Item(
            id=str(uuid.uuid4()),
            name=coerce_field("name", fields["name"]),
            stock=coerce_field("stock", fields["stock"]),
            price=coerce_field("price", fields["price"]),
        )

        self.table.put(self.codec.to_storage(item))

        logger.info("Item %s created", item.id)
        return item

    def read(self, name: str | None = None) -> list[Decrypted | Raw]:
        """
        Return every item, optionally only those whose name contains ``name``.

        Names are only comparable after decryption (each ciphertext has its
        own IV), so this is always a full scan filtered in memory. Rows that
        could not be decrypted have no usable name and never match a filter.
        """
        items = [self.codec.from_storage(row) for row in self.table.scan()]

        if name:
            items = [
                item
                for item in items
                if isinstance(item, Decrypted) and name in item.item.name
            ]

        logger.info("Retrieved %d items", len(items))
        return items

    def update(self, item_id: str, fields: Mapping[str, Any]) -> Decrypted | Raw:
        # Raises NoFieldsToUpdate before the table is touched
        spec = build_update(self.codec, fields)

        row = self.table.update(item_id, spec)

        logger.info("Item %s updated (%s)", item_id, spec.expression)
        return self.codec.from_storage(row)

    def delete(self, item_id: str) -> Decrypted | Raw:
        row = self.table.delete(item_id)
        if row is None:
            raise NotFoundError(item_id)

        logger.info("Item %s deleted", item_id)
        return self.codec.from_storage(row)
