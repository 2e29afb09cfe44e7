"""Couple pairing invites."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.deps import require_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.swipe import InviteRedeemRequest
from app.schemas.user import UserRef
from app.services.pairing_service import PairingService

router = APIRouter(prefix="/api/invite", tags=["invite"])


@router.post("/generate")
async def generate_invite(user: User = Depends(require_user), db: AsyncSession = Depends(get_db)):
    token = await PairingService(db).generate_invite(user.id)
    return {"token": token}


@router.post("/redeem")
async def redeem_invite(
    req: InviteRedeemRequest,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    owner = await PairingService(db).redeem_invite(user.id, req.token)
    return {"pairedWith": UserRef.model_validate(owner).to_json()}
