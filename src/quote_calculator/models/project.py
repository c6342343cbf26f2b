from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

CSV_MODULE = "Module"
CSV_DESIGN_DAYS = "Design (days)"
CSV_FRONTEND_DAYS = "Front-end (days)"
CSV_BACKEND_DAYS = "Back-end (days)"
CSV_DESIGN_PERFORMERS = "Design Performers"
CSV_DEVELOPMENT_PERFORMERS = "Development Performers"

CSV_COLUMNS = (
    CSV_MODULE,
    CSV_DESIGN_DAYS,
    CSV_FRONTEND_DAYS,
    CSV_BACKEND_DAYS,
    CSV_DESIGN_PERFORMERS,
    CSV_DEVELOPMENT_PERFORMERS,
)


class ProjectModule(BaseModel):
    id: str
    name: str
    design_days: float = Field(default=0.0, ge=0)
    frontend_days: float = Field(default=0.0, ge=0)
    backend_days: float = Field(default=0.0, ge=0)
    design_performers: Sequence[str] = Field(default_factory=list)
    development_performers: Sequence[str] = Field(default_factory=list)
    is_enabled: bool = True

    class Config:
        frozen = True
        allow_inf_nan = False
        populate_by_name = True
        alias_generator = to_camel
        json_schema_extra = {
            "example": {
                "id": "module-0",
                "name": "Authentication",
                "designDays": 3,
                "frontendDays": 5,
                "backendDays": 8,
                "designPerformers": ["UI Designer"],
                "developmentPerformers": ["Frontend Developer", "Backend Developer"],
                "isEnabled": True,
            }
        }

    @property
    def max_development_days(self) -> float:
        return max(self.frontend_days, self.backend_days)

    @property
    def effort_days(self) -> float:
        return self.design_days + self.frontend_days + self.backend_days


__all__ = [
    "CSV_BACKEND_DAYS",
    "CSV_COLUMNS",
    "CSV_DESIGN_DAYS",
    "CSV_DESIGN_PERFORMERS",
    "CSV_DEVELOPMENT_PERFORMERS",
    "CSV_FRONTEND_DAYS",
    "CSV_MODULE",
    "ProjectModule",
]
