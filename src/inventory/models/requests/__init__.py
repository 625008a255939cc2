from .items import ItemCreate, ItemCreatedResponse, ItemUpdate
from .json_body import JsonBody
from .serde_base import SerdeBase

__all__ = [
    "ItemCreate",
    "ItemCreatedResponse",
    "ItemUpdate",
    "JsonBody",
    "SerdeBase",
]
