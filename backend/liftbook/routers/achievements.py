from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from liftbook.db import get_db
from liftbook.models import User
from liftbook.schemas.achievement import (
    AchievementOverview, MarkNotified, NewlyEarnedRead, UserAchievementRead,
)
from liftbook.services import achievements
from liftbook.deps.auth import get_current_user

router = APIRouter(prefix="/achievements", tags=["achievements"])

@router.get("", response_model=AchievementOverview)
def my_achievements(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return achievements.list_achievements(db, current.id)

@router.get("/unnotified", response_model=list[UserAchievementRead])
def unnotified(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return achievements.unnotified_achievements(db, current.id)

@router.post("/notified")
def mark_notified(payload: MarkNotified, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    n = achievements.mark_notified(db, current.id, payload.achievement_ids)
    return {"updated": n}

@router.post("/check", response_model=list[NewlyEarnedRead])
def check_now(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return achievements.evaluate_achievements(db, current.id, "manual")
