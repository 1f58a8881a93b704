"""Journal data model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Journal(BaseModel):
    """A named journal with the capital in effect before its first entry."""

    id: Optional[int] = Field(default=None, description="Database ID")
    name: str = Field(..., min_length=1, description="Journal name")
    initial_capital: float = Field(..., ge=0, description="Starting capital")
    created_at: datetime = Field(
        default_factory=datetime.now, description="Journal creation timestamp"
    )

    model_config = {"frozen": True}
