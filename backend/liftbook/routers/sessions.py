from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, sessionmaker
from liftbook.db import get_db, get_session_factory
from liftbook.errors import InvalidStateError, NotFoundError
from liftbook.schemas.session import SessionComplete, SessionCompleted, SessionCreate, SessionRead
from liftbook.schemas.record import RecalcRead
from liftbook.repositories.session_repo import SessionRepository
from liftbook.services import followups, workouts
from liftbook.deps.auth import get_current_user
from liftbook.models import User  # type only

router = APIRouter(prefix="/sessions", tags=["sessions"])

@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def create_session(payload: SessionCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return workouts.start_session(db, current.id, notes=payload.notes)

@router.get("", response_model=list[SessionRead])
def list_my_sessions(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return SessionRepository(db).list_by_user(current.id, limit=limit, offset=offset)

@router.post("/{session_id}/complete", response_model=SessionCompleted)
def complete_session(
    session_id: int,
    payload: SessionComplete,
    db: Session = Depends(get_db),
    factory: sessionmaker = Depends(get_session_factory),
    current: User = Depends(get_current_user),
):
    try:
        sess = workouts.complete_session(
            db, current.id, session_id,
            duration_seconds=payload.duration_seconds, notes=payload.notes,
        )
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    except InvalidStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    # The workout is durable from here on; follow-up failures only show up in `failed`
    report = followups.dispatch(factory, current.id, sess.id)
    return {
        "session": sess,
        "streak": report.streak,
        "new_achievements": report.new_achievements,
        "completed_challenges": report.completed_challenges,
        "failed": report.failed,
    }

@router.delete("/{session_id}", response_model=RecalcRead)
def discard_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    try:
        result = workouts.discard_session(db, current.id, session_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return result.recalc
