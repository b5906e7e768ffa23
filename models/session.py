from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List

MODE_BMC = "bmc"
MODE_DESIGN = "design"
VALID_MODES = (MODE_BMC, MODE_DESIGN)

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ChatMessage:
    role: str
    content: str
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict:
        return {
            "role": self.role,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class Session:
    session_id: str
    mode: str = MODE_BMC
    progress: int = 0
    chat: List[ChatMessage] = field(default_factory=list)
    # dicts keep insertion order, which the summary relies on
    answers: Dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "mode": self.mode,
            "progress": self.progress,
            "history": [message.to_dict() for message in self.chat],
            "bmc_data": dict(self.answers),
            "created_at": self.created_at.isoformat(),
        }
