"""
htw_shared.models — Pydantic models matching each hosted table.

These models are used by:
- packages/pipeline: validate CSV rows before the batch insert, type rows for analytics
- packages/api: validate request bodies and coerce query results

All models provide:
  .from_db_row(row: dict) -> Model
  .to_insert_dict() -> dict
"""

from htw_shared.models.base import TableModel
from htw_shared.models.companies import Company, Coordinates, RelatedCompany
from htw_shared.models.events import Event, EventAttendee
from htw_shared.models.geography import IslandData
from htw_shared.models.industries import Industry, RelatedIndustry
from htw_shared.models.linkedin import EngagementMetrics, LinkedInPost
from htw_shared.models.members import Member

__all__ = [
    "TableModel",
    "Industry",
    "Company",
    "Coordinates",
    "RelatedCompany",
    "RelatedIndustry",
    "Member",
    "Event",
    "EventAttendee",
    "LinkedInPost",
    "EngagementMetrics",
    "IslandData",
]
