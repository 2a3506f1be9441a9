from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.defaults import DEFAULT_CHAT_HISTORY_LIMIT
from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.models.user import User
from app.schemas.ai_chat import ChatRequest, ChatResponse, ChatMessageResponse
from app.services.ai_coach import handle_chat_message, get_chat_history

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
def chat_with_coach(
    chat_data: ChatRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    reply, reply_row = handle_chat_message(
        db,
        user.id,
        chat_data.message,
        context=chat_data.context,
        session_id=chat_data.session_id,
    )
    return ChatResponse(response=reply, chat_message=ChatMessageResponse.model_validate(reply_row))


@router.get("/history", response_model=List[ChatMessageResponse])
def chat_history(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return get_chat_history(db, user.id, DEFAULT_CHAT_HISTORY_LIMIT)
