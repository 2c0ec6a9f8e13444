from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class PhoneNumber(BaseModel):
    id: str
    name: Optional[str] = None
    number: Optional[str] = None
    areaCode: Optional[str] = None
    assistantId: Optional[str] = None
    vapiPhoneNumberId: Optional[str] = None
    createdAt: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class PhoneNumberCreate(BaseModel):
    name: str = Field(..., min_length=1)
    assistantId: Optional[str] = Field(None)


class PhoneNumberUpdate(BaseModel):
    id: str = Field(..., min_length=1)
    # Omitted leaves the link alone; null or "" unlinks
    assistantId: Optional[str] = Field(None)

    @property
    def links_assistant(self) -> bool:
        return "assistantId" in self.model_fields_set


class PhoneNumberId(BaseModel):
    id: str = Field(..., min_length=1)


class PhoneNumberList(BaseModel):
    phoneNumbers: List[PhoneNumber]
