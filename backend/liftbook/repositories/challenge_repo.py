from __future__ import annotations
from typing import Optional
from sqlalchemy import select
from liftbook.models import (
    Challenge, ChallengeParticipant, ChallengeProgressEvent, ChallengeStatus,
)
from liftbook.repositories.base import BaseRepository

class ChallengeRepository(BaseRepository[Challenge]):
    model = Challenge

    def open_participations(self, user_id: int) -> list[ChallengeParticipant]:
        """Participations in ACTIVE challenges the user has not finished yet."""
        stmt = select(ChallengeParticipant).join(Challenge, ChallengeParticipant.challenge_id == Challenge.id)\
            .where(
                ChallengeParticipant.user_id == user_id,
                ChallengeParticipant.completed_at.is_(None),
                Challenge.status == ChallengeStatus.ACTIVE,
            )\
            .order_by(ChallengeParticipant.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def lock_participant(self, participant_id: int) -> Optional[ChallengeParticipant]:
        stmt = select(ChallengeParticipant).where(ChallengeParticipant.id == participant_id).with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def list_participations(self, user_id: int) -> list[ChallengeParticipant]:
        stmt = select(ChallengeParticipant).where(ChallengeParticipant.user_id == user_id)\
                                           .order_by(ChallengeParticipant.joined_at.desc(), ChallengeParticipant.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def session_applied(self, participant_id: int, session_id: int) -> bool:
        stmt = select(ChallengeProgressEvent.id).where(
            ChallengeProgressEvent.participant_id == participant_id,
            ChallengeProgressEvent.session_id == session_id,
        )
        return self.db.execute(stmt).first() is not None

    def record_progress(self, participant: ChallengeParticipant, session_id: int, delta: float) -> ChallengeProgressEvent:
        participant.progress = (participant.progress or 0) + delta
        ev = ChallengeProgressEvent(participant_id=participant.id, session_id=session_id, delta=delta)
        self.db.add(ev)
        self.db.flush()
        return ev

    def join(self, challenge_id: int, user_id: int) -> ChallengeParticipant:
        return self.add_and_refresh(ChallengeParticipant(challenge_id=challenge_id, user_id=user_id, progress=0))
