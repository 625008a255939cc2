"""Error taxonomy shared by the item pipeline and the HTTP layer."""


class InventoryError(Exception):
    """Base class for every error raised by the inventory service."""


class ConfigurationError(InventoryError):
    """Bad or missing startup configuration. Fatal, never per-request."""


class ValidationError(InventoryError):
    """Missing or malformed caller input (400)."""


class NoFieldsToUpdate(ValidationError):
    def __init__(self, message="No fields to update"):
        super().__init__(message)


class NotFoundError(InventoryError):
    """The target item does not exist (404)."""

    def __init__(self, item_id: str):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class DecryptionError(InventoryError):
    """A serialized cipher value could not be turned back into plaintext."""


class StorageError(InventoryError):
    """The storage backend call failed (500)."""
