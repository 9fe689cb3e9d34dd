"""Marketing plan service layer."""

from datetime import datetime

from projectstore.domains.base import ChildRecordService
from projectstore.exceptions.project import MarketingPlanNotFoundError
from projectstore.schemas.marketing_plan import (
    MarketingPlan,
    MarketingPlanCreate,
    MarketingPlanStatus,
)
from projectstore.shared.kinds import EntityKind


class MarketingPlanService(ChildRecordService[MarketingPlan]):
    """Marketing plans follow the same routing as tasks and milestones.

    Plans of system projects live in the session overlay like any other
    child record.
    """

    kind = EntityKind.MARKETING_PLAN
    record_schema = MarketingPlan
    not_found_error = MarketingPlanNotFoundError

    def _resource(self):
        return self.backend.marketing_plans

    def _build(
        self, project_id: str, record_id: str, data: MarketingPlanCreate, now: datetime
    ) -> MarketingPlan:
        return MarketingPlan(
            id=record_id,
            project_id=project_id,
            title=data.title,
            content=data.content,
            status=MarketingPlanStatus.draft,
            budget=data.budget,
            start_date=data.start_date,
            end_date=data.end_date,
            created_at=now,
            updated_at=now,
        )
