"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Immutable value compared by its fields, such as a caller identity."""

    model_config = ConfigDict(frozen=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one validated primitive.

    Handles and tag names are validated once on construction and then
    passed around typed; `.root` gives the primitive back, and
    `model_dump()` returns it unwrapped. Wrappers order by their value so
    lists of names sort naturally.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)

    def __lt__(self, other: "RootValueObject[T]") -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.root < other.root
