from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Assistant(BaseModel):
    # Only the id is required so records written by hand or by other
    # versions of the service still load; creation enforces the rest.
    id: str
    name: Optional[str] = None
    firstMessage: Optional[str] = None
    systemPrompt: Optional[str] = None
    voiceProvider: Optional[str] = None
    voiceId: Optional[str] = None
    endCallMessage: Optional[str] = None
    maxDurationSeconds: Optional[int] = None
    phoneNumberId: Optional[str] = None
    vapiAssistantId: Optional[str] = None
    createdAt: Optional[str] = None

    # Keys written by other versions of the service survive a rewrite
    model_config = ConfigDict(extra="allow")


class AssistantCreate(BaseModel):
    name: str = Field(..., min_length=1)
    firstMessage: str = Field(..., min_length=1)
    systemPrompt: Optional[str] = Field(None)


class AssistantUpdate(BaseModel):
    id: str = Field(..., min_length=1)
    # Empty or zero values count as not provided
    name: Optional[str] = None
    firstMessage: Optional[str] = None
    systemPrompt: Optional[str] = None
    voiceProvider: Optional[str] = None
    voiceId: Optional[str] = None
    endCallMessage: Optional[str] = None
    maxDurationSeconds: Optional[int] = None
    phoneNumberId: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually supplied with a value, without the id."""
        supplied = self.model_dump(exclude={"id"}, exclude_unset=True)
        return {key: value for key, value in supplied.items() if value}


class AssistantId(BaseModel):
    id: str = Field(..., min_length=1)


class AssistantList(BaseModel):
    assistants: List[Assistant]
