from typing import Literal

from pydantic import BaseModel, Field

ChatRole = Literal["user", "assistant", "system"]


class ChatTurn(BaseModel):
    role: ChatRole
    content: str
    timestamp: int | None = None


class ChatEnhanceRequest(BaseModel):
    message: str = Field(default="", max_length=4000)
    resume_text: str | None = Field(default=None, max_length=50000)
    model: str | None = None


class ChatHistoryResponse(BaseModel):
    resume_id: str
    messages: list[ChatTurn] = Field(default_factory=list)


class QuickAction(BaseModel):
    label: str
    prompt: str
