from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from app.api.deps import get_session
from app.domain.session import SessionContext

router = APIRouter(prefix="/api/assistant", tags=["assistant"])


class AskIn(BaseModel):
    text: str


def _message(m):
    return {"role": m.role.value, "text": m.text}


@router.post("", summary="Ask the health assistant")
async def ask(payload: AskIn, request: Request, ctx: SessionContext = Depends(get_session)):
    text = payload.text.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Question is empty")
    assistant = request.app.state.assistant
    reply = await assistant.converse(ctx, text)
    return _message(reply)


@router.get("/history", summary="Chat transcript for this session")
def history(ctx: SessionContext = Depends(get_session)):
    return {"messages": [_message(m) for m in ctx.chat]}
