from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from liftbook.db import get_db
from liftbook.models import User
from liftbook.services.streaks import consistency_streak, current_streak
from liftbook.deps.auth import get_current_user

router = APIRouter(prefix="/stats", tags=["stats"])

@router.get("/streak")
def streak(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return {
        "weeks": current_streak(db, current.id),
        "consistency_weeks": consistency_streak(db, current.id),
    }
