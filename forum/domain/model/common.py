"""Base models for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for flat domain entities.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # Flat entities are replaced, never mutated
        arbitrary_types_allowed=True,  # Allow custom value objects
    )


class AggregateModel(BaseModel):
    """Base class for the thread aggregate and the nodes it owns.

    An aggregate is loaded, mutated in place and persisted as one unit per
    request, so unlike flat entities its parts are mutable. Assignments are
    still validated against the field constraints.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )
