"""Swipe feed, swipe recording and the match list."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.deps import require_user, get_notifier
from app.db.session import get_db
from app.models.user import User
from app.realtime.notifier import RealtimeNotifier
from app.schemas.swipe import SwipeRequest, MatchOut
from app.services.match_service import MatchService
from app.services.swipe_service import SwipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["swipe"])


@router.get("/swipe/next")
async def next_photo(
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
    notifier: RealtimeNotifier = Depends(get_notifier),
):
    photo, total = await SwipeService(db, notifier).next_candidate(user)
    return {"photo": photo.to_json(), "totalPhotos": total, "coupleMode": user.paired_with_id is not None}


@router.post("/swipe")
async def record_swipe(
    req: SwipeRequest,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
    notifier: RealtimeNotifier = Depends(get_notifier),
):
    result = await SwipeService(db, notifier).record_swipe(
        actor_id=user.id,
        photo_id=req.photo_id,
        photo_owner_id=req.photo_owner_id,
        direction=req.direction,
    )
    return result.to_json()


@router.get("/match")
async def list_matches(user: User = Depends(require_user), db: AsyncSession = Depends(get_db)):
    matches = await MatchService(db).list_matches(user.id)
    return {
        "matches": [MatchOut.model_validate(m).to_json() for m in matches],
        "currentUserId": str(user.id),
    }
