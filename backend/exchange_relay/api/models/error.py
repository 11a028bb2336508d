from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """JSON body for unexpected server errors.

    Relay errors (400/500/502/504/upstream passthrough) are sent as plain text
    instead; this shape only covers failures outside the relay taxonomy.
    """

    error: str
    message: str
    traceback: Optional[str] = None
