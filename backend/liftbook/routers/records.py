from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftbook.db import get_db
from liftbook.models import User
from liftbook.repositories.record_repo import RecordRepository
from liftbook.schemas.record import RecordRead, WeeklyCount
from liftbook.services.scoring import select_display_record
from liftbook.services.streaks import week_start
from liftbook.settings import get_settings
from liftbook.deps.auth import get_current_user

router = APIRouter(prefix="/records", tags=["records"])

@router.get("", response_model=list[RecordRead])
def list_display_records(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    exercise_id: int | None = Query(None, ge=1),
):
    """One record per exercise: the kind that ranks highest for display."""
    by_exercise: dict[int, list] = {}
    for pr in RecordRepository(db).list_by_user(current.id):
        if exercise_id is None or pr.exercise_id == exercise_id:
            by_exercise.setdefault(pr.exercise_id, []).append(pr)
    shown = [select_display_record(prs) for prs in by_exercise.values()]
    return sorted(shown, key=lambda pr: pr.achieved_at, reverse=True)

@router.get("/this-week", response_model=WeeklyCount)
def records_this_week(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    tz = ZoneInfo(get_settings().TIMEZONE)
    monday = week_start(datetime.now(timezone.utc), tz)
    since = datetime.combine(monday, time.min, tzinfo=tz).astimezone(timezone.utc)
    return {"count": RecordRepository(db).count_since(current.id, since)}

@router.get("/exercises/{exercise_id}", response_model=list[RecordRead])
def exercise_records(exercise_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    """Every stored kind for one exercise, best tier first."""
    prs = RecordRepository(db).list_for_exercise(current.id, exercise_id)
    if not prs:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No records for this exercise")
    return sorted(prs, key=lambda pr: (pr.record_kind.tier, -pr.value))
