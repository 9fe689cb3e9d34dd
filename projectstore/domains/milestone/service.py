"""Milestone service layer."""

from datetime import datetime

from projectstore.domains.base import ChildRecordService
from projectstore.exceptions.project import MilestoneNotFoundError
from projectstore.schemas.milestone import Milestone, MilestoneCreate, MilestoneStatus
from projectstore.shared.kinds import EntityKind


class MilestoneService(ChildRecordService[Milestone]):
    kind = EntityKind.MILESTONE
    record_schema = Milestone
    not_found_error = MilestoneNotFoundError

    def _resource(self):
        return self.backend.milestones

    def _build(
        self, project_id: str, record_id: str, data: MilestoneCreate, now: datetime
    ) -> Milestone:
        return Milestone(
            id=record_id,
            project_id=project_id,
            title=data.title,
            description=data.description,
            target_date=data.target_date,
            status=MilestoneStatus.upcoming,
            created_at=now,
            updated_at=now,
        )
