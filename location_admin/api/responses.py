"""
Response envelope builder.

Every admin mutation answers with the same JSON shape: an `error` flag, an
optional `data` payload and a human-readable `message`, plus navigation
targets when the client should move on after saving.
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from location_admin.db.schemas import Envelope


class ResponseEnvelope:
    def __init__(self):
        self.error = False
        self.data: Any = None
        self.message: Optional[str] = None
        self.previous_url: Optional[str] = None
        self.next_url: Optional[str] = None
        self.code = 200

    def set_error(self, error: bool = True) -> "ResponseEnvelope":
        self.error = error
        return self

    def set_message(self, message: Optional[str]) -> "ResponseEnvelope":
        self.message = message
        return self

    def set_data(self, data: Any) -> "ResponseEnvelope":
        self.data = data
        return self

    def set_previous_url(self, url: Optional[str]) -> "ResponseEnvelope":
        self.previous_url = url
        return self

    def set_next_url(self, url: Optional[str]) -> "ResponseEnvelope":
        self.next_url = url
        return self

    def set_code(self, code: int) -> "ResponseEnvelope":
        self.code = code
        return self

    def to_envelope(self) -> Envelope:
        return Envelope(
            error=self.error,
            data=jsonable_encoder(self.data),
            message=self.message,
            previous_url=self.previous_url,
            next_url=self.next_url,
        )

    def to_response(self) -> JSONResponse:
        body = self.to_envelope().model_dump()
        # Navigation targets only appear when set
        for key in ("previous_url", "next_url"):
            if body[key] is None:
                body.pop(key)
        return JSONResponse(body, status_code=self.code)
