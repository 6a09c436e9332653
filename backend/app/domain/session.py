from dataclasses import dataclass, field
from typing import List, Optional

from app.domain.cart import Cart
from app.domain.enums import ChatRole, UserRole


@dataclass(frozen=True)
class Actor:
    id: str
    name: str
    role: UserRole
    email: str = ""

    @property
    def is_operator(self) -> bool:
        return self.role in (UserRole.PHARMACIST, UserRole.ADMIN)


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    text: str


@dataclass
class SessionContext:
    """Everything one browser session owns: who is signed in, the cart, the chat."""

    session_id: str
    actor: Optional[Actor] = None
    cart: Cart = field(default_factory=Cart)
    chat: List[ChatMessage] = field(default_factory=list)

    def current_actor(self) -> Optional[Actor]:
        return self.actor

    def append_chat(self, role: ChatRole, text: str) -> ChatMessage:
        msg = ChatMessage(role=role, text=text)
        self.chat.append(msg)
        return msg
