from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from inventory.core.codec import ENCRYPTED_FIELDS, ItemCodec, coerce_field
from inventory.core.errors import NoFieldsToUpdate

__all__ = ["ATTRIBUTE_EXISTS_ID", "Assignment", "UpdateSpec", "build_update"]

ATTRIBUTE_EXISTS_ID = "attribute_exists(id)"


class Assignment(NamedTuple):
    name_placeholder: str
    value_placeholder: str

    def __str__(self):
        return f"{self.name_placeholder} = {self.value_placeholder}"


@dataclass(frozen=True)
class UpdateSpec:
    assignments: list[Assignment]
    attribute_names: dict[str, str]
    attribute_values: dict[str, str]
    condition: str = field(default=ATTRIBUTE_EXISTS_ID)

    @property
    def expression(self) -> str:
        return "SET " + ", ".join(str(a) for a in self.assignments)

    def resolved(self) -> dict[str, str]:
        """Column -> encrypted value, in assignment order."""
        return {
            self.attribute_names[a.name_placeholder]: self.attribute_values[
                a.value_placeholder
            ]
            for a in self.assignments
        }


def build_update(codec: ItemCodec, fields: Mapping[str, Any]) -> UpdateSpec:
    """
    Build a conditional update for the fields the caller supplied.

    A field takes part when its key is present, whatever its value, so
    ``{"stock": 0}`` is a real update. Only ``None`` counts as not supplied.
    """
    assignments = []
    attribute_names = {}
    attribute_values = {}

    for name in ENCRYPTED_FIELDS:
        if fields.get(name) is None:
            continue

        value = coerce_field(name, fields[name])
        assignment = Assignment(f"#{name}", f":{name}")

        assignments.append(assignment)
        attribute_names[assignment.name_placeholder] = name
        attribute_values[assignment.value_placeholder] = codec.encrypt_field(name, value)

    if not assignments:
        raise NoFieldsToUpdate()

    return UpdateSpec(
        assignments=assignments,
        attribute_names=attribute_names,
        attribute_values=attribute_values,
    )
