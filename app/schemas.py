from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ConversationMessage(BaseModel):
    role: Literal["user", "assistant"] = Field(..., description="'user' or 'assistant'")
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: StrictStr = Field(..., min_length=1, description="User's latest message")
    conversation_history: Optional[List[ConversationMessage]] = Field(
        default_factory=list,
        alias="conversationHistory",
        description="Prior turns held by the caller; only the last 6 reach the model",
    )


class ChatResponse(BaseModel):
    response: str
    success: bool = True


class ChatErrorResponse(BaseModel):
    error: str
    response: str
    success: bool = False


class ErrorBody(BaseModel):
    error: str
