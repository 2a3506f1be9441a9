from typing import Literal, Optional
from datetime import datetime
from pydantic import Field
from app.schemas.base import CamelModel


class ChatRequest(CamelModel):
    message: str = Field(min_length=1, max_length=2000)
    context: Optional[Literal["pause", "fail", "general"]] = None
    session_id: Optional[str] = None


class ChatMessageResponse(CamelModel):
    id: str
    user_id: str
    session_id: Optional[str] = None
    message: str
    is_user_message: bool
    ai_response: Optional[str] = None
    context: Optional[str] = None
    created_at: Optional[datetime] = None


class ChatResponse(CamelModel):
    response: str
    chat_message: ChatMessageResponse
