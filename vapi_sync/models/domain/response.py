from typing import Optional
from pydantic import BaseModel


class DeleteResponse(BaseModel):
    message: str
    success: Optional[bool] = None
