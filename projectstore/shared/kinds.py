"""Child entity kinds and the collection names they map to."""

from enum import Enum


class EntityKind(str, Enum):
    TASK = "todo"
    MILESTONE = "milestone"
    MARKETING_PLAN = "marketing_plan"

    @property
    def collection(self) -> str:
        """Attribute holding ``{project_id: [records]}`` on store payloads."""
        return _COLLECTIONS[self]

    @property
    def tombstones(self) -> str:
        """Attribute holding ``{project_id: {deleted ids}}`` on the overlay payload."""
        return _TOMBSTONES[self]

    @property
    def id_prefix(self) -> str:
        return _ID_PREFIXES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_COLLECTIONS = {
    EntityKind.TASK: "tasks_by_project",
    EntityKind.MILESTONE: "milestones_by_project",
    EntityKind.MARKETING_PLAN: "marketing_plans_by_project",
}

_TOMBSTONES = {
    EntityKind.TASK: "deleted_tasks",
    EntityKind.MILESTONE: "deleted_milestones",
    EntityKind.MARKETING_PLAN: "deleted_marketing_plans",
}

_ID_PREFIXES = {
    EntityKind.TASK: "todo",
    EntityKind.MILESTONE: "milestone",
    EntityKind.MARKETING_PLAN: "marketing",
}

_LABELS = {
    EntityKind.TASK: "Todo",
    EntityKind.MILESTONE: "Milestone",
    EntityKind.MARKETING_PLAN: "Marketing plan",
}
