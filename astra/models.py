"""Pydantic models for the HTTP surface."""

from pydantic import BaseModel, Field, StrictStr


class ChatRequest(BaseModel):
    """Incoming chat payload."""

    message: StrictStr = Field(min_length=1, description="User supplied chat message.")


class ChatResponse(BaseModel):
    """Policy-compliant assistant reply."""

    reply: str


class ErrorResponse(BaseModel):
    """Error body returned to HTTP clients."""

    error: str
