"""
Focus coach replies for the premium chat.

Replies are canned and chosen by the context the client reports (the user
paused, abandoned a session, or is just asking). Both sides of the exchange
are stored so the history endpoint can replay them.
"""
import logging
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from app.models.ai_chat import AiChatMessage

logger = logging.getLogger(__name__)

GENERAL_RESPONSE = (
    "I understand you're having trouble staying focused. Here are some suggestions: "
    "Try the 25-minute Pomodoro technique, eliminate distractions by turning off notifications, "
    "and break large tasks into smaller ones."
)

CONTEXT_RESPONSES = {
    "pause": (
        "Taking breaks is normal! Remember why you started this session. "
        "Try taking 3 deep breaths and getting back to your task. You've got this!"
    ),
    "fail": (
        "Don't worry about incomplete sessions - they're part of the learning process. "
        "Consider trying shorter 15-minute sessions next time, or identifying what distracted you."
    ),
}


def coach_reply(context: Optional[str]) -> str:
    return CONTEXT_RESPONSES.get(context or "general", GENERAL_RESPONSE)


def handle_chat_message(
    db: Session,
    user_id: str,
    message: str,
    context: Optional[str] = None,
    session_id: Optional[str] = None,
) -> Tuple[str, AiChatMessage]:
    """Store the user's message and the coach reply; return (reply, stored reply row)."""
    db.add(AiChatMessage(
        user_id=user_id,
        session_id=session_id,
        message=message,
        is_user_message=True,
        context=context,
    ))

    reply = coach_reply(context)
    reply_row = AiChatMessage(
        user_id=user_id,
        session_id=session_id,
        message=message,
        is_user_message=False,
        ai_response=reply,
        context=context,
    )
    db.add(reply_row)
    db.commit()
    db.refresh(reply_row)
    logger.info("[AI] user=%s context=%s", user_id, context or "general")
    return reply, reply_row


def get_chat_history(db: Session, user_id: str, limit: int):
    return db.query(AiChatMessage).filter(
        AiChatMessage.user_id == user_id
    ).order_by(AiChatMessage.created_at.desc()).limit(limit).all()
