"""AI copilot passthroughs; always answered by the backend."""

import logging
from typing import Optional

from projectstore.domains.base import StoreService
from projectstore.schemas.marketing_plan import MarketingPlan

logger = logging.getLogger(__name__)


class CopilotService(StoreService):
    async def suggest_tasks(self, project_id: str, context: Optional[str] = None) -> list[str]:
        with self._recording_errors("Failed to get todo suggestions"):
            suggestions = await self.backend.copilot.suggest_todos(project_id, context)
            logger.debug("Got %d todo suggestions for %s", len(suggestions), project_id)
            return suggestions

    async def suggest_milestones(
        self, project_id: str, context: Optional[str] = None
    ) -> list[str]:
        with self._recording_errors("Failed to get milestone suggestions"):
            return await self.backend.copilot.suggest_milestones(project_id, context)

    async def generate_marketing_plan(
        self, project_id: str, goals: Optional[str] = None
    ) -> MarketingPlan:
        with self._recording_errors("Failed to generate marketing plan"):
            return await self.backend.copilot.generate_marketing_plan(project_id, goals)
