from app.adapters.gemini_assistant import GeminiAssistantAdapter
from app.domain.enums import ChatRole
from app.domain.session import ChatMessage, SessionContext
from app.utils.logging import get_logger

log = get_logger("assistant")

FALLBACK_REPLY = (
    "I'm having trouble connecting to the medical database right now. "
    "Please try again later."
)
EMPTY_REPLY = "I couldn't generate a response at this time."


class AssistantService:
    """
    Text in, text out. Never raises on model failures: the caller always gets
    a reply to show, falling back to an apology.
    """

    def __init__(self, adapter=None):
        self.adapter = adapter or GeminiAssistantAdapter()

    async def ask(self, text: str) -> str:
        try:
            reply = await self.adapter.generate(text)
        except Exception as e:
            log.error(f"assistant call failed: {type(e).__name__}: {e}")
            return FALLBACK_REPLY
        return reply or EMPTY_REPLY

    async def converse(self, ctx: SessionContext, text: str) -> ChatMessage:
        ctx.append_chat(ChatRole.USER, text)
        reply = await self.ask(text)
        # appended even if the client stopped waiting; it only shows up in history
        return ctx.append_chat(ChatRole.ASSISTANT, reply)
