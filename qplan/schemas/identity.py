"""The caller identity handed over by the identity provider."""
from typing import Optional
from pydantic import BaseModel


class Identity(BaseModel):
    user_id: str
    display_name: str
    email: Optional[str] = None

    def is_admin(self, admin_email: str) -> bool:
        """Single designated administrator — there is no role table."""
        return bool(self.email) and self.email.lower() == admin_email.lower()
