"""Session payload carried in the encrypted cookie."""

from typing import Optional

from pydantic import BaseModel

from topten.domain.model.user import User


class SessionData(BaseModel):
    """What the session cookie stores about the signed-in user.

    Not frozen: a request may log in or out before the cookie is written.
    """

    user_id: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    is_logged_in: bool = False

    @classmethod
    def for_user(cls, user: User) -> "SessionData":
        """Logged-in payload for a user."""
        return cls(
            user_id=str(user.id),
            username=user.username,
            email=user.email,
            is_logged_in=True,
        )
