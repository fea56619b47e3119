
from pydantic import BaseModel


# Error body used by the AI proxy endpoints
class ErrorResponse(BaseModel):
    error: str


class CurrentUser(BaseModel):
    id: str
    email: str | None = None
