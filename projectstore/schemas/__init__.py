# ruff: noqa: F403, F401
"""Schemas package initialization."""

# Import all schemas to ensure they're registered
from .base import *
from .copilot import *
from .marketing_plan import *
from .milestone import *

# Rebuild models to resolve forward references
from .project import *
from .project import ProjectWithChildren
from .session import *
from .storage import *
from .todo import *

# Rebuild models after all schemas are loaded
ProjectWithChildren.model_rebuild()
