from datetime import date, datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field


CallStatus = Literal["uploading", "transcribing", "analyzing", "completed", "failed"]


class CallBase(BaseModel):
    company_id: UUID
    sdr_id: UUID
    uploaded_by: UUID
    call_date: date
    transcript: Optional[str] = None
    duration_seconds: Optional[int] = Field(None, ge=0)
    prospect_name: Optional[str] = Field(None, max_length=200)


class CallCreate(CallBase):
    """Payload to register an uploaded call. Week and year are derived from call_date."""
    status: CallStatus = "analyzing"


class CallStatusUpdate(BaseModel):
    status: CallStatus


class Call(CallBase):
    """Full model returned from the database."""
    id: UUID
    week_number: int
    year: int
    status: CallStatus
    created_at: datetime

    model_config = {"from_attributes": True}
