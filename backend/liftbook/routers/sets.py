from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, sessionmaker
from liftbook.db import get_db, get_session_factory
from liftbook.errors import InvalidStateError, NotFoundError
from liftbook.schemas.logged_set import SetCreate, SetLogged, SetRead, SetUpdate
from liftbook.schemas.record import RecalcRead
from liftbook.services import followups, workouts
from liftbook.deps.auth import get_current_user
from liftbook.models import User

router = APIRouter(tags=["sets"])

@router.post("/sessions/{session_id}/sets", response_model=SetLogged, status_code=status.HTTP_201_CREATED)
def log_set(
    session_id: int,
    payload: SetCreate,
    db: Session = Depends(get_db),
    factory: sessionmaker = Depends(get_session_factory),
    current: User = Depends(get_current_user),
):
    try:
        result = workouts.log_set(db, current.id, session_id, **payload.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{e.what} not found")

    if result.pr.is_new_pr:
        followups.dispatch(factory, current.id, session_id, followups.PR_ACHIEVED_TASKS)
    return {"set": result.logged_set, "pr": result.pr}

@router.get("/sessions/{session_id}/sets", response_model=list[SetRead])
def list_session_sets(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    try:
        return workouts.session_sets(db, current.id, session_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")

@router.patch("/sets/{set_id}", response_model=SetRead)
def edit_set(
    set_id: int,
    payload: SetUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    changes = payload.model_dump(exclude_unset=True)
    # flags are not nullable; an explicit null means "leave as is"
    for flag in ("is_warmup", "is_dropset"):
        if changes.get(flag, False) is None:
            changes.pop(flag)
    try:
        s, _ = workouts.edit_set(db, current.id, set_id, **changes)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Set not found")
    except InvalidStateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return s

@router.delete("/sets/{set_id}", response_model=RecalcRead)
def delete_set(set_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    try:
        return workouts.delete_set(db, current.id, set_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Set not found")
