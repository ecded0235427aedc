"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Ids are UUIDs; the core sees them as strings

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.user import User  # noqa: F401
from app.models.project import Project, ProjectMember  # noqa: F401
from app.models.task import Task, TaskAssignee  # noqa: F401
from app.models.subtask import Subtask, SubtaskDependency  # noqa: F401
from app.models.notification import Notification  # noqa: F401
from app.models.absence import Absence  # noqa: F401
