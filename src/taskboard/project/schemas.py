"""
Pydantic schemas for project/task endpoints.

Wire names are camelCase (``projectName``, ``listUserAsign``); Python
attributes are snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectInsert(Schema):
    project_name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    category_id: int | None = Field(default=None, ge=1)
    alias: str | None = Field(default=None, max_length=200)


class UserProject(Schema):
    project_id: int = Field(..., ge=1)
    user_id: int = Field(..., ge=1)


class TaskUserAssign(Schema):
    task_id: int = Field(..., ge=1)
    user_id: int = Field(..., ge=1)


class UpdateStatus(Schema):
    task_id: int = Field(..., ge=1)
    status_id: str = Field(..., min_length=1, max_length=20)


class UpdatePriority(Schema):
    task_id: int = Field(..., ge=1)
    priority_id: int = Field(..., ge=1)


class UpdateDescription(Schema):
    task_id: int = Field(..., ge=1)
    description: str = Field(..., max_length=5000)


class TimeTrackingUpdate(Schema):
    task_id: int = Field(..., ge=1)
    time_tracking_spent: int = Field(..., ge=0)
    time_tracking_remaining: int = Field(..., ge=0)


class UpdateEstimate(Schema):
    task_id: int = Field(..., ge=1)
    original_estimate: int = Field(..., ge=0)


class TaskInsert(Schema):
    list_user_asign: list[int] = Field(default_factory=list)
    task_name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    status_id: str = Field(..., min_length=1, max_length=20)
    original_estimate: int = Field(default=0, ge=0)
    time_tracking_spent: int = Field(default=0, ge=0)
    time_tracking_remaining: int = Field(default=0, ge=0)
    project_id: int = Field(..., ge=1)
    type_id: int = Field(..., ge=1)
    priority_id: int = Field(..., ge=1)


class TaskEdit(TaskInsert):
    task_id: int = Field(..., ge=1)
