"""In-memory view of projects and the currently opened project's children."""

from dataclasses import dataclass, field
from typing import Optional

from projectstore.schemas.marketing_plan import MarketingPlan
from projectstore.schemas.milestone import Milestone, MilestoneStatus
from projectstore.schemas.project import Project, ProjectCounts, ProjectStatus
from projectstore.schemas.todo import Task, TaskPriority, TaskStatus
from projectstore.shared.kinds import EntityKind

_CHILD_ATTRS = {
    EntityKind.TASK: "tasks",
    EntityKind.MILESTONE: "milestones",
    EntityKind.MARKETING_PLAN: "marketing_plans",
}


@dataclass
class PaginationMeta:
    page: int = 1
    limit: int = 20
    total: int = 0


@dataclass
class ProjectsState:
    """What the UI currently shows.

    Project objects held here carry counters; every write to a local
    project's children refreshes them through :meth:`apply_counts`.
    """

    projects: list[Project] = field(default_factory=list)
    current_project: Optional[Project] = None
    tasks: list[Task] = field(default_factory=list)
    milestones: list[Milestone] = field(default_factory=list)
    marketing_plans: list[MarketingPlan] = field(default_factory=list)
    error: Optional[str] = None
    meta: PaginationMeta = field(default_factory=PaginationMeta)
    local_projects_count: int = 0

    # Getters

    @property
    def has_local_projects(self) -> bool:
        return self.local_projects_count > 0

    @property
    def active_projects(self) -> list[Project]:
        return [p for p in self.projects if p.status == ProjectStatus.active]

    @property
    def completed_projects(self) -> list[Project]:
        return [p for p in self.projects if p.status == ProjectStatus.completed]

    @property
    def archived_projects(self) -> list[Project]:
        return [p for p in self.projects if p.status == ProjectStatus.archived]

    @property
    def pending_tasks(self) -> list[Task]:
        return [t for t in self.tasks if t.status == TaskStatus.pending]

    @property
    def in_progress_tasks(self) -> list[Task]:
        return [t for t in self.tasks if t.status == TaskStatus.in_progress]

    @property
    def completed_tasks(self) -> list[Task]:
        return [t for t in self.tasks if t.status == TaskStatus.completed]

    @property
    def urgent_tasks(self) -> list[Task]:
        return [t for t in self.tasks if t.priority in (TaskPriority.high, TaskPriority.urgent)]

    @property
    def upcoming_milestones(self) -> list[Milestone]:
        return [
            m
            for m in self.milestones
            if m.status in (MilestoneStatus.upcoming, MilestoneStatus.in_progress)
        ]

    @property
    def project_progress(self) -> int:
        """Percentage of completed tasks in the current project."""
        if not self.tasks:
            return 0
        return round(len(self.completed_tasks) / len(self.tasks) * 100)

    # Projects

    def find_project(self, project_id: str) -> Optional[Project]:
        for project in self.projects:
            if project.id == project_id:
                return project
        if self.current_project is not None and self.current_project.id == project_id:
            return self.current_project
        return None

    def replace_project(self, project: Project) -> None:
        self.projects = [project if p.id == project.id else p for p in self.projects]
        if self.current_project is not None and self.current_project.id == project.id:
            self.current_project = project

    def remove_project(self, project_id: str) -> None:
        self.projects = [p for p in self.projects if p.id != project_id]
        if self.current_project is not None and self.current_project.id == project_id:
            self.clear_current_project()

    def apply_counts(self, project_id: str, counts: ProjectCounts) -> None:
        update = counts.model_dump()
        self.projects = [
            p.model_copy(update=update) if p.id == project_id else p for p in self.projects
        ]
        if self.current_project is not None and self.current_project.id == project_id:
            self.current_project = self.current_project.model_copy(update=update)

    # Children

    def children(self, kind: EntityKind) -> list:
        return getattr(self, _CHILD_ATTRS[kind])

    def set_children(self, kind: EntityKind, records: list) -> None:
        setattr(self, _CHILD_ATTRS[kind], list(records))

    def add_child(self, kind: EntityKind, record) -> None:
        self.set_children(kind, [*self.children(kind), record])

    def replace_child(self, kind: EntityKind, record) -> None:
        self.set_children(
            kind, [record if r.id == record.id else r for r in self.children(kind)]
        )

    def remove_child(self, kind: EntityKind, record_id: str) -> None:
        self.set_children(kind, [r for r in self.children(kind) if r.id != record_id])

    # Utility

    def clear_current_project(self) -> None:
        self.current_project = None
        self.tasks = []
        self.milestones = []
        self.marketing_plans = []

    def clear_error(self) -> None:
        self.error = None

    def reset(self) -> None:
        self.projects = []
        self.clear_current_project()
        self.error = None
        self.meta = PaginationMeta(limit=self.meta.limit)
