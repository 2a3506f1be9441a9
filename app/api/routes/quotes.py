from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.motivational_quote import MotivationalQuote
from app.schemas.analytics import QuoteResponse

router = APIRouter()


@router.get("/random", response_model=QuoteResponse)
def get_random_quote(db: Session = Depends(get_db)):
    quote = db.query(MotivationalQuote).filter(
        MotivationalQuote.is_active.is_(True)
    ).order_by(func.random()).first()
    if not quote:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No quotes available"
        )
    return quote
