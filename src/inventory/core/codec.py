"""
Mapping between plaintext items and their at-rest rows.

Only ``id`` is stored in the clear. ``name``, ``stock`` and ``price`` are
each encrypted on their own; the numeric fields are encrypted as their
decimal string form and parsed back only once decryption succeeded.
"""

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from inventory.core.cipher import FieldCipher
from inventory.core.errors import DecryptionError, ValidationError
from inventory.shared import Logger

__all__ = [
    "ENCRYPTED_FIELDS",
    "Decrypted",
    "Item",
    "ItemCodec",
    "MAX_STOCK",
    "Raw",
    "coerce_field",
]

logger = Logger(__name__).get_logger()

ENCRYPTED_FIELDS = ("name", "stock", "price")

# largest integer a JSON client can round-trip exactly
MAX_STOCK = 2**53 - 1


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    stock: int
    price: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Decrypted:
    """A stored row whose sensitive fields were all decrypted."""

    item: Item

    @property
    def id(self) -> str:
        return self.item.id

    def to_dict(self) -> dict[str, Any]:
        return self.item.to_dict()


@dataclass(frozen=True)
class Raw:
    """A stored row that could not be decrypted, returned as it was found."""

    row: Mapping[str, Any]

    @property
    def id(self) -> str:
        return self.row.get("id")

    def to_dict(self) -> dict[str, Any]:
        return dict(self.row)


def coerce_field(field: str, value: Any) -> str | int | float:
    """Validate a caller supplied value for one of the item fields."""
    if field == "name":
        if not isinstance(value, str):
            raise ValidationError("Field 'name' must be a string")
        return value

    # bool is an int subclass but never a valid quantity
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise ValidationError(f"Field '{field}' must be a number")

    if field == "stock":
        try:
            stock = int(value)
            # compared as int when possible, float() overflows on huge ints
            fractional = not isinstance(value, int) and stock != float(value)
        except (ValueError, OverflowError) as e:
            raise ValidationError("Field 'stock' must be an integer") from e
        if fractional or stock < 0:
            raise ValidationError("Field 'stock' must be a non-negative integer")
        if stock > MAX_STOCK:
            raise ValidationError("Field 'stock' is too large")
        return stock

    if field == "price":
        try:
            price = float(value)
        except (ValueError, OverflowError) as e:
            raise ValidationError("Field 'price' must be a number") from e
        if not math.isfinite(price):
            raise ValidationError("Field 'price' must be a finite number")
        return price

    raise ValidationError(f"Unknown field '{field}'")


class ItemCodec:
    def __init__(self, cipher: FieldCipher):
        self.cipher = cipher

    def encrypt_field(self, field: str, value: str | int | float) -> str:
        return self.cipher.encrypt(str(value))

    def to_storage(self, item: Item) -> dict[str, str]:
        row = {"id": item.id}
        for field in ENCRYPTED_FIELDS:
            row[field] = self.encrypt_field(field, getattr(item, field))
        return row

    def from_storage(self, row: Mapping[str, Any]) -> Decrypted | Raw:
        """
        Decrypt a stored row.

        The three fields are decrypted as a unit: if any of them fails the
        whole row comes back untouched as ``Raw`` so that legacy or corrupt
        rows stay listable instead of disappearing.
        """
        try:
            name = self.cipher.decrypt(row.get("name"))
            stock = int(self.cipher.decrypt(row.get("stock")))
            price = float(self.cipher.decrypt(row.get("price")))
        except (DecryptionError, ValueError) as e:
            logger.warning(
                "Could not decrypt item with id %s, returning as is: %s",
                row.get("id"),
                e,
            )
            return Raw(row=dict(row))

        return Decrypted(item=Item(id=row["id"], name=name, stock=stock, price=price))
