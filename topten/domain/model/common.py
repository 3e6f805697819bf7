"""Entity base and timestamps."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    """Timezone-aware now; naive datetimes never enter the domain."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base for users, lists, categories and votes.

    Entities are frozen; services derive changed copies with
    ``model_copy(update=...)`` and hand them to repositories.
    """

    model_config = ConfigDict(frozen=True)
