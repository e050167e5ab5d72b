import hashlib
import logging
import re
import unicodedata

from taskboard.auth.security import AuthSecurityError, decode_access_token
from taskboard.project.models import Project, ProjectUser, Task, TaskUser
from taskboard.project.repository import (
    PriorityRepository,
    ProjectRepository,
    ProjectUserRepository,
    StatusRepository,
    TaskRepository,
    TaskUserRepository,
    UserRepository,
)
from taskboard.project.schemas import (
    ProjectInsert,
    TaskEdit,
    TaskInsert,
    TaskUserAssign,
    TimeTrackingUpdate,
    UpdateDescription,
    UpdateEstimate,
    UpdatePriority,
    UpdateStatus,
    UserProject,
)
from taskboard.responses import ResponseEntity

logger = logging.getLogger(__name__)


def slugify(text: str) -> str:
    """Lowercase ASCII alias: "Dự án Mới!" -> "du-an-moi"."""
    text = unicodedata.normalize("NFKD", text.replace("đ", "d").replace("Đ", "D"))
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    return re.sub(r"[^a-z0-9]+", "-", text).strip("-")


def make_alias(name: str) -> str:
    """
    Alias used as the natural key for projects and tasks.

    Names with nothing left after slugify() (CJK, emoji, punctuation) get a
    short digest of the name instead.
    """
    return slugify(name) or hashlib.sha1(name.strip().encode("utf-8")).hexdigest()[:12]


class ProjectService:
    """
    Project and task workflows on top of the generic repositories.

    Every method returns a ResponseEntity; rule violations become 4xx
    entities, database errors propagate.
    """

    def __init__(self, connection_string: str | None = None):
        self.projects = ProjectRepository(connection_string)
        self.tasks = TaskRepository(connection_string)
        self.project_users = ProjectUserRepository(connection_string)
        self.task_users = TaskUserRepository(connection_string)
        self.statuses = StatusRepository(connection_string)
        self.priorities = PriorityRepository(connection_string)
        self.users = UserRepository(connection_string)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _user_id(token: str | None) -> int | None:
        try:
            return decode_access_token(token)["user_id"]
        except AuthSecurityError:
            return None

    def _is_member(self, project: Project, user_id: int) -> bool:
        if project.creator == user_id:
            return True
        rows = self.project_users.get_multi_by_list_condition_and(
            [("project_id", project.id), ("user_id", user_id)]
        )
        return any(not row.deleted for row in rows)

    def _members(self, project_id: int) -> list[dict]:
        rows = self.project_users.get_multi_by_condition("project_id", project_id)
        users = self.users.get_multi_by_id([r.user_id for r in rows if not r.deleted])
        return [{"user_id": u.id, "name": u.name, "avatar": u.avatar, "email": u.email} for u in users]

    def _assignees(self, task_id: int) -> list[dict]:
        rows = self.task_users.get_multi_by_condition("task_id", task_id)
        users = self.users.get_multi_by_id([r.user_id for r in rows if not r.deleted])
        return [{"user_id": u.id, "name": u.name, "avatar": u.avatar} for u in users]

    def _assign(self, task_id: int, user_ids: list[int]) -> None:
        for user_id in dict.fromkeys(user_ids):
            self.task_users.insert(TaskUser(task_id=task_id, user_id=user_id, deleted=False))

    def _editable_task(self, task_id: int, token: str | None):
        """Load a task the token's user may edit, or the error response."""
        user_id = self._user_id(token)
        if user_id is None:
            return None, ResponseEntity.unauthorized()
        task = self.tasks.get_single_by_id(task_id)
        if task is None or task.deleted:
            return None, ResponseEntity.not_found("Task is not found!", task_id)
        project = self.projects.get_single_by_id(task.project_id)
        if project is None or not self._is_member(project, user_id):
            return None, ResponseEntity.forbidden()
        return task, None

    def _patch_task(self, task_id: int, token: str | None, patch: Task, message: str) -> ResponseEntity:
        task, error = self._editable_task(task_id, token)
        if error:
            return error
        self.tasks.update(task.task_id, patch)
        logger.info("Updated task %s", task.task_id)
        return ResponseEntity.success(self.tasks.get_single_by_id(task.task_id), message)

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def create_project(self, model: ProjectInsert, token: str | None) -> ResponseEntity:
        creator = None
        if token is not None:
            creator = self._user_id(token)
            if creator is None:
                return ResponseEntity.unauthorized()

        alias = make_alias(model.alias or model.project_name)
        if self.projects.check_valid_by_condition("alias", alias):
            return ResponseEntity.bad_request("Project name already exists!", model.project_name)

        self.projects.insert(
            Project(
                project_name=model.project_name,
                description=model.description,
                category_id=model.category_id,
                alias=alias,
                deleted=False,
                creator=creator,
            )
        )
        created = self.projects.get_single_by_condition("alias", alias)
        logger.info("Created project %r (creator=%s)", alias, creator)
        return ResponseEntity.success(created, "Project created successfully!")

    def get_project_by_id(self, project_id: int) -> ResponseEntity:
        project = self.projects.get_single_by_id(project_id)
        if project is None or project.deleted:
            return ResponseEntity.not_found("Project is not found!", project_id)

        tasks = [t for t in self.tasks.get_multi_by_condition("project_id", project.id) if not t.deleted]
        tasks_by_status = []
        for status in self.statuses.get_all():
            tasks_by_status.append(
                {
                    "status_id": status.status_id,
                    "status_name": status.status_name,
                    "alias": status.alias,
                    "tasks": [
                        {**self.tasks.mapping.to_dict(t), "assignees": self._assignees(t.task_id)}
                        for t in tasks
                        if t.status_id == status.status_id
                    ],
                }
            )

        content = {
            **self.projects.mapping.to_dict(project),
            "members": self._members(project.id),
            "tasks_by_status": tasks_by_status,
        }
        return ResponseEntity.success(content)

    def get_all_project(self, keyword: str = "") -> ResponseEntity:
        keyword = (keyword or "").strip().lower()
        projects = [
            p
            for p in self.projects.get_all()
            if not p.deleted and (not keyword or keyword in (p.project_name or "").lower())
        ]
        content = [
            {**self.projects.mapping.to_dict(p), "members": self._members(p.id)} for p in projects
        ]
        return ResponseEntity.success(content)

    def get_project_paging(
        self,
        page_index: int,
        page_size: int,
        keywords: str = "",
        filter: str | None = None,
    ) -> ResponseEntity:
        try:
            paging = self.projects.get_paging(page_index, page_size, keywords, filter)
        except ValueError as e:
            return ResponseEntity.bad_request(str(e), filter)
        return ResponseEntity.success(paging)

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def _owned_project(self, project_id: int, token: str | None):
        user_id = self._user_id(token)
        if user_id is None:
            return None, ResponseEntity.unauthorized()
        project = self.projects.get_single_by_id(project_id)
        if project is None or project.deleted:
            return None, ResponseEntity.not_found("Project is not found!", project_id)
        if project.creator != user_id:
            return None, ResponseEntity.forbidden("Only the project creator can manage members!")
        return project, None

    def add_user_project(self, model: UserProject, token: str | None) -> ResponseEntity:
        project, error = self._owned_project(model.project_id, token)
        if error:
            return error
        if self.users.get_single_by_id(model.user_id) is None:
            return ResponseEntity.not_found("User is not found!", model.user_id)

        existing = self.project_users.get_multi_by_list_condition_and(
            [("project_id", project.id), ("user_id", model.user_id)]
        )
        if any(not row.deleted for row in existing):
            return ResponseEntity.bad_request("User is already in the project!")

        self.project_users.insert(ProjectUser(project_id=project.id, user_id=model.user_id, deleted=False))
        logger.info("Added user %s to project %s", model.user_id, project.id)
        return ResponseEntity.success(None, "User added to the project!")

    def remove_user_from_project(self, model: UserProject, token: str | None) -> ResponseEntity:
        project, error = self._owned_project(model.project_id, token)
        if error:
            return error

        rows = self.project_users.get_multi_by_list_condition_and(
            [("project_id", project.id), ("user_id", model.user_id)]
        )
        if not rows:
            return ResponseEntity.not_found("User is not in the project!", model.user_id)

        removed = self.project_users.delete_by_id([r.id for r in rows])
        logger.info("Removed user %s from project %s", model.user_id, project.id)
        return ResponseEntity.success(removed, "User removed from the project!")

    def add_task_user(self, model: TaskUserAssign, token: str | None) -> ResponseEntity:
        task, error = self._editable_task(model.task_id, token)
        if error:
            return error

        project = self.projects.get_single_by_id(task.project_id)
        if not self._is_member(project, model.user_id):
            return ResponseEntity.bad_request("User is not in the project!")

        existing = self.task_users.get_multi_by_list_condition_and(
            [("task_id", task.task_id), ("user_id", model.user_id)]
        )
        if existing:
            return ResponseEntity.bad_request("User is already assigned to the task!")

        self._assign(task.task_id, [model.user_id])
        return ResponseEntity.success(None, "User assigned to the task!")

    def remove_user_from_task(self, model: TaskUserAssign, token: str | None) -> ResponseEntity:
        task, error = self._editable_task(model.task_id, token)
        if error:
            return error

        rows = self.task_users.get_multi_by_list_condition_and(
            [("task_id", task.task_id), ("user_id", model.user_id)]
        )
        if not rows:
            return ResponseEntity.not_found("User is not assigned to the task!", model.user_id)

        removed = self.task_users.delete_by_id([r.id for r in rows])
        return ResponseEntity.success(removed, "User removed from the task!")

    # ------------------------------------------------------------------
    # Task fields
    # ------------------------------------------------------------------

    def update_status_task(self, model: UpdateStatus, token: str | None) -> ResponseEntity:
        return self._patch_task(model.task_id, token, Task(status_id=model.status_id), "Status updated!")

    def update_priority(self, model: UpdatePriority, token: str | None) -> ResponseEntity:
        return self._patch_task(model.task_id, token, Task(priority_id=model.priority_id), "Priority updated!")

    def update_description(self, model: UpdateDescription, token: str | None) -> ResponseEntity:
        return self._patch_task(
            model.task_id, token, Task(description=model.description), "Description updated!"
        )

    def update_time_tracking(self, model: TimeTrackingUpdate, token: str | None) -> ResponseEntity:
        patch = Task(
            time_tracking_spent=model.time_tracking_spent,
            time_tracking_remaining=model.time_tracking_remaining,
        )
        return self._patch_task(model.task_id, token, patch, "Time tracking updated!")

    def update_estimate(self, model: UpdateEstimate, token: str | None) -> ResponseEntity:
        return self._patch_task(
            model.task_id, token, Task(original_estimate=model.original_estimate), "Estimate updated!"
        )

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def create_task(self, model: TaskInsert, token: str | None) -> ResponseEntity:
        user_id = self._user_id(token)
        if user_id is None:
            return ResponseEntity.unauthorized()

        project = self.projects.get_single_by_id(model.project_id)
        if project is None or project.deleted:
            return ResponseEntity.not_found("Project is not found!", model.project_id)
        if not self._is_member(project, user_id):
            return ResponseEntity.forbidden()

        alias = make_alias(model.task_name)
        natural_key = [("project_id", project.id), ("alias", alias)]
        if self.tasks.get_multi_by_list_condition_and(natural_key):
            return ResponseEntity.bad_request("Task already exists!", model.task_name)

        self.tasks.insert(
            Task(
                task_name=model.task_name,
                alias=alias,
                description=model.description,
                status_id=model.status_id,
                original_estimate=model.original_estimate,
                time_tracking_spent=model.time_tracking_spent,
                time_tracking_remaining=model.time_tracking_remaining,
                project_id=project.id,
                type_id=model.type_id,
                priority_id=model.priority_id,
                reporter_id=user_id,
                deleted=False,
            )
        )

        # insert() does not return the generated key; read the row back.
        created = next(iter(self.tasks.get_multi_by_list_condition_and(natural_key)), None)
        if created is None:
            return ResponseEntity.bad_request("Task could not be created!", model.task_name)
        self._assign(created.task_id, model.list_user_asign)
        logger.info("Created task %s in project %s", created.task_id, project.id)
        return ResponseEntity.success(created, "Task created successfully!")

    def update_task(self, model: TaskEdit, token: str | None) -> ResponseEntity:
        task, error = self._editable_task(model.task_id, token)
        if error:
            return error

        patch = Task(
            task_name=model.task_name,
            alias=make_alias(model.task_name),
            description=model.description,
            status_id=model.status_id,
            original_estimate=model.original_estimate,
            time_tracking_spent=model.time_tracking_spent,
            time_tracking_remaining=model.time_tracking_remaining,
            type_id=model.type_id,
            priority_id=model.priority_id,
        )
        self.tasks.update(task.task_id, patch)

        # Replace the assignee list wholesale.
        self.task_users.delete_by_task_id([task.task_id])
        self._assign(task.task_id, model.list_user_asign)
        logger.info("Updated task %s", task.task_id)
        return ResponseEntity.success(self.tasks.get_single_by_id(task.task_id), "Task updated!")

    def remove_task(self, task_id: int, token: str | None) -> ResponseEntity:
        user_id = self._user_id(token)
        if user_id is None:
            return ResponseEntity.unauthorized()

        task = self.tasks.get_single_by_id(task_id)
        if task is None or task.deleted:
            return ResponseEntity.not_found("Task is not found!", task_id)
        project = self.projects.get_single_by_id(task.project_id)
        if user_id not in (task.reporter_id, project.creator if project else None):
            return ResponseEntity.forbidden("Only the reporter or project creator can remove a task!")

        self.task_users.delete_by_task_id([task_id])
        removed = self.tasks.delete_by_id([task_id])
        logger.info("Removed task %s", task_id)
        return ResponseEntity.success(removed, "Task removed!")

    def get_task_detail(self, task_id: int, token: str | None) -> ResponseEntity:
        if self._user_id(token) is None:
            return ResponseEntity.unauthorized()

        task = self.tasks.get_single_by_id(task_id)
        if task is None or task.deleted:
            return ResponseEntity.not_found("Task is not found!", task_id)

        status = self.statuses.get_single_by_id(task.status_id) if task.status_id else None
        priority = self.priorities.get_single_by_id(task.priority_id) if task.priority_id else None
        content = {
            **self.tasks.mapping.to_dict(task),
            "status": status,
            "priority": priority,
            "assignees": self._assignees(task.task_id),
        }
        return ResponseEntity.success(content)
