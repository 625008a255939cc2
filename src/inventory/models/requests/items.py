from pydantic import StrictFloat, StrictInt

from .serde_base import SerdeBase

# Strict so that JSON booleans and numeric strings are not coerced to numbers
Quantity = StrictInt | None
Amount = StrictFloat | StrictInt | None


class ItemCreate(SerdeBase):
    # Presence is checked by the store so that 0 and "" are told apart from absent
    name: str | None = None
    stock: Quantity = None
    price: Amount = None


class ItemUpdate(SerdeBase):
    name: str | None = None
    stock: Quantity = None
    price: Amount = None


class ItemCreatedResponse(SerdeBase):
    message: str
    id: str
    name: str
    stock: int
    price: float
