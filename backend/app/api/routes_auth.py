from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.domain.enums import UserRole
from app.domain.session import Actor, SessionContext
from app.api.deps import get_session

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginIn(BaseModel):
    email: str
    name: Optional[str] = None
    role: UserRole = UserRole.PATIENT


def _actor_dict(actor: Optional[Actor]):
    if actor is None:
        return None
    return {"id": actor.id, "name": actor.name, "email": actor.email, "role": actor.role.value}


@router.post("/login", summary="Sign in with any claimed identity")
def login(payload: LoginIn, ctx: SessionContext = Depends(get_session)):
    # no credential check: identity issuance lives outside this service
    name = payload.name or payload.email.split("@")[0]
    ctx.actor = Actor(id=uuid4().hex[:9], name=name, email=payload.email, role=payload.role)
    return {"user": _actor_dict(ctx.actor)}


@router.post("/logout", summary="Sign out (the cart is kept)")
def logout(ctx: SessionContext = Depends(get_session)):
    ctx.actor = None
    return {"ok": True}


@router.get("/me", summary="Current actor")
def me(ctx: SessionContext = Depends(get_session)):
    return {"user": _actor_dict(ctx.current_actor())}
