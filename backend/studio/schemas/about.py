import json
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import CamelModel


class AboutValue(BaseModel):
    title: str = Field(min_length=1)
    description: str


class AboutOut(CamelModel):
    story: str
    space: str
    philosophy: str
    values: List[AboutValue]
    updated_at: Optional[datetime] = None

    # stored as a JSON string in the table
    @field_validator("values", mode="before")
    @classmethod
    def _decode_values(cls, v):
        if isinstance(v, str):
            return json.loads(v or "[]")
        return v


class AboutUpdateIn(CamelModel):
    story: Optional[str] = None
    space: Optional[str] = None
    philosophy: Optional[str] = None
    values: Optional[List[AboutValue]] = None
