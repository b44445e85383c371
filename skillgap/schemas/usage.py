# usage.py
from pydantic import BaseModel, Field


class ApiUsageSummary(BaseModel):
    operation: str
    total_credits: int = Field(ge=0)
    usage_count: int = Field(ge=0)
