from typing import Any, Optional
from pydantic import BaseModel


class Envelope(BaseModel):
    """Uniform JSON body returned by the admin endpoints."""
    error: bool = False
    data: Any = None
    message: Optional[str] = None
    previous_url: Optional[str] = None
    next_url: Optional[str] = None
