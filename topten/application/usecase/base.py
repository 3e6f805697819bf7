"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from topten.domain.error import NotFoundError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_uuid(value: str, resource: str) -> UUID:
    """Parse a path or body identifier; a malformed one names nothing."""
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise NotFoundError(resource, value) from None
