"""
Project-management entities.

Field order matters: the first field is the primary key, and column lists
are written in declaration order. Every field defaults to None so that a
partially filled entity can drive a sparse update.
"""

from taskboard.entity import entity


@entity(table="project")
class Project:
    id: int | None = None
    project_name: str | None = None
    description: str | None = None
    category_id: int | None = None
    alias: str | None = None
    deleted: bool | None = None
    creator: int | None = None


@entity(table="task")
class Task:
    task_id: int | None = None
    task_name: str | None = None
    alias: str | None = None
    description: str | None = None
    status_id: str | None = None
    original_estimate: int | None = None
    time_tracking_spent: int | None = None
    time_tracking_remaining: int | None = None
    project_id: int | None = None
    type_id: int | None = None
    priority_id: int | None = None
    reporter_id: int | None = None
    deleted: bool | None = None


@entity(table="project_user")
class ProjectUser:
    id: int | None = None
    project_id: int | None = None
    user_id: int | None = None
    deleted: bool | None = None


@entity(table="task_user")
class TaskUser:
    id: int | None = None
    task_id: int | None = None
    user_id: int | None = None
    deleted: bool | None = None


@entity(table="status")
class Status:
    # Status keys are codes ("1".."4") assigned by the caller.
    status_id: str | None = None
    status_name: str | None = None
    alias: str | None = None
    deleted: bool | None = None


@entity(table="priority")
class Priority:
    priority_id: int | None = None
    priority: str | None = None
    description: str | None = None
    alias: str | None = None
    deleted: bool | None = None


@entity(table="user_account")
class UserAccount:
    id: int | None = None
    email: str | None = None
    name: str | None = None
    avatar: str | None = None
    phone_number: str | None = None
