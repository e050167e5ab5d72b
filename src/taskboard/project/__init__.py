"""
Project

Entities, repositories and the service behind the project/task API.
"""

from taskboard.project.models import (
    Priority,
    Project,
    ProjectUser,
    Status,
    Task,
    TaskUser,
    UserAccount,
)
from taskboard.project.repository import (
    PriorityRepository,
    ProjectRepository,
    ProjectUserRepository,
    StatusRepository,
    TaskRepository,
    TaskUserRepository,
    UserRepository,
)
from taskboard.project.service import ProjectService

__all__ = [
    "Priority",
    "PriorityRepository",
    "Project",
    "ProjectRepository",
    "ProjectService",
    "ProjectUser",
    "ProjectUserRepository",
    "Status",
    "StatusRepository",
    "Task",
    "TaskRepository",
    "TaskUser",
    "TaskUserRepository",
    "UserAccount",
    "UserRepository",
]
