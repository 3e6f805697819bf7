"""Value object bases.

Values are frozen pydantic models: equal when their fields are equal and
safe to share between requests.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


class RootValueObject(RootModel[T], Generic[T]):
    """A single validated primitive; ``str()`` gives the raw value."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
