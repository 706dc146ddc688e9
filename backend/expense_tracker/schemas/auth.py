# expense_tracker/schemas/auth.py
from pydantic import BaseModel, ConfigDict


class SessionUser(BaseModel):
    """The user record as serialized into the session store."""
    id: int
    username: str
    password: str

    model_config = ConfigDict(from_attributes=True)
