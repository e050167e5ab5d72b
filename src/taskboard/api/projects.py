from flask import Blueprint, g, jsonify, request

from taskboard.api.security import require_bearer_token
from taskboard.api.validation import int_arg, validate_body
from taskboard.project import ProjectService
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

bp = Blueprint("projects", __name__)

project_service = ProjectService()


def respond(result: ResponseEntity):
    return jsonify(result.to_dict()), result.status_code


@bp.route("/createProject", methods=["POST"])
def create_project():
    """Create a project without an owner."""
    model = validate_body(ProjectInsert)
    return respond(project_service.create_project(model, None))


@bp.route("/createProjectAuthorize", methods=["POST"])
@require_bearer_token
def create_project_authorize():
    """Create a project owned by the caller."""
    model = validate_body(ProjectInsert)
    return respond(project_service.create_project(model, g.access_token))


@bp.route("/getProjectDetail", methods=["GET"])
@require_bearer_token
def get_project_detail():
    return respond(project_service.get_project_by_id(int_arg("id")))


@bp.route("/getAllProject", methods=["GET"])
def get_all_project():
    return respond(project_service.get_all_project(request.args.get("keyword", "")))


@bp.route("/getProjectPaging", methods=["GET"])
def get_project_paging():
    """One page of projects; ``filter`` is a JSON list of {Column, Value}."""
    result = project_service.get_project_paging(
        page_index=int_arg("pageIndex", 1),
        page_size=int_arg("pageSize", 10),
        keywords=request.args.get("keyword", ""),
        filter=request.args.get("filter"),
    )
    return respond(result)


@bp.route("/assignUserProject", methods=["POST"])
@require_bearer_token
def assign_user_project():
    model = validate_body(UserProject)
    return respond(project_service.add_user_project(model, g.access_token))


@bp.route("/removeUserFromProject", methods=["POST"])
@require_bearer_token
def remove_user_from_project():
    model = validate_body(UserProject)
    return respond(project_service.remove_user_from_project(model, g.access_token))


@bp.route("/assignUserTask", methods=["POST"])
@require_bearer_token
def assign_user_task():
    model = validate_body(TaskUserAssign)
    return respond(project_service.add_task_user(model, g.access_token))


@bp.route("/removeUserFromTask", methods=["POST"])
@require_bearer_token
def remove_user_from_task():
    model = validate_body(TaskUserAssign)
    return respond(project_service.remove_user_from_task(model, g.access_token))


@bp.route("/updateStatus", methods=["PUT"])
@require_bearer_token
def update_status():
    model = validate_body(UpdateStatus)
    return respond(project_service.update_status_task(model, g.access_token))


@bp.route("/updatePriority", methods=["PUT"])
@require_bearer_token
def update_priority():
    model = validate_body(UpdatePriority)
    return respond(project_service.update_priority(model, g.access_token))


@bp.route("/updateDescription", methods=["PUT"])
@require_bearer_token
def update_description():
    model = validate_body(UpdateDescription)
    return respond(project_service.update_description(model, g.access_token))


@bp.route("/updateTimeTracking", methods=["PUT"])
@require_bearer_token
def update_time_tracking():
    model = validate_body(TimeTrackingUpdate)
    return respond(project_service.update_time_tracking(model, g.access_token))


@bp.route("/updateEstimate", methods=["PUT"])
@require_bearer_token
def update_estimate():
    model = validate_body(UpdateEstimate)
    return respond(project_service.update_estimate(model, g.access_token))


@bp.route("/createTask", methods=["POST"])
@require_bearer_token
def create_task():
    model = validate_body(TaskInsert)
    return respond(project_service.create_task(model, g.access_token))


@bp.route("/updateTask", methods=["POST"])
@require_bearer_token
def update_task():
    model = validate_body(TaskEdit)
    return respond(project_service.update_task(model, g.access_token))


@bp.route("/removeTask", methods=["DELETE"])
@require_bearer_token
def remove_task():
    return respond(project_service.remove_task(int_arg("taskId"), g.access_token))


@bp.route("/getTaskDetail", methods=["GET"])
@require_bearer_token
def get_task_detail():
    return respond(project_service.get_task_detail(int_arg("taskId"), g.access_token))
