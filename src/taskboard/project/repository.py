from taskboard.project.models import (
    Priority,
    Project,
    ProjectUser,
    Status,
    Task,
    TaskUser,
    UserAccount,
)
from taskboard.repository import RepositoryBase


class ProjectRepository(RepositoryBase[Project]):
    entity_type = Project


class TaskRepository(RepositoryBase[Task]):
    entity_type = Task


class ProjectUserRepository(RepositoryBase[ProjectUser]):
    entity_type = ProjectUser


class TaskUserRepository(RepositoryBase[TaskUser]):
    entity_type = TaskUser


class StatusRepository(RepositoryBase[Status]):
    entity_type = Status


class PriorityRepository(RepositoryBase[Priority]):
    entity_type = Priority


class UserRepository(RepositoryBase[UserAccount]):
    entity_type = UserAccount
