from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from liftbook.db import get_db
from liftbook.models import ChallengeStatus, User
from liftbook.schemas.challenge import MyChallengeRead
from liftbook.services.challenges import list_user_challenges
from liftbook.deps.auth import get_current_user

router = APIRouter(prefix="/challenges", tags=["challenges"])

@router.get("/mine", response_model=list[MyChallengeRead])
def my_challenges(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    status: ChallengeStatus | None = Query(None),
):
    return list_user_challenges(db, current.id, status)
