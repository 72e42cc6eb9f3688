from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel

from .dimensions import DimensionKey


CoachingStatus = Literal["open", "in_progress", "completed"]


class CoachingItem(BaseModel):
    """A coaching action item issued for one dimension of one analysed call."""
    id: UUID
    call_analysis_id: UUID
    sdr_id: UUID
    company_id: UUID
    dimension: DimensionKey
    action_item: str
    status: CoachingStatus
    created_at: datetime
    completed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CoachingItemUpdate(BaseModel):
    status: CoachingStatus
