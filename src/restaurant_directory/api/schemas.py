from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List


class HealthResponse(BaseModel):
    status: str
    records: int = 0


class AreaResponse(BaseModel):
    """One area group with its member count."""
    id: str
    name: str
    member_count: int
    prefixes: List[str] = Field(default_factory=list)
    is_fallback: bool = False


class StatsResponse(BaseModel):
    """Collection-wide figures for the loaded dataset."""
    total: int
    per_area: Dict[str, int]
    average_rating: float

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "total": 3,
                "per_area": {"north-london": 1, "west-london": 1, "other": 1},
                "average_rating": 4.2,
            }
        }
    )
