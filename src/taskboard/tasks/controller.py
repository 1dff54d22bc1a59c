from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import format_date
from ..common.http import domain_error, json_body, login_required, server_error
from ..container import Container
from ..core.exceptions import DomainError
from ..progress.model import ProgressEntry
from .model import Task

logger = logging.getLogger(__name__)


def task_json(task: Task) -> dict:
    return {
        "task_id": task.task_id,
        "task_type": task.task_type,
        "kind": task.kind.value,
        "task_name": task.task_name,
        "user_id": task.owner_id,
        "assigned_by": task.assigned_by,
        "date": format_date(task.date),
        "timeline": format_date(task.timeline),
        "time_in_mins": task.time_in_mins,
        "status": task.status,
        "remarks": task.remarks,
    }


def _progress_row_json(entry: ProgressEntry) -> dict:
    # Same shape as a task row so the day reads as one list.
    return {
        "task_id": entry.task_id,
        "task_type": entry.task_type or "History",
        "kind": "progress",
        "task_name": entry.task_name,
        "user_id": entry.user_id,
        "assigned_by": None,
        "date": format_date(entry.history_date),
        "timeline": format_date(entry.history_date),
        "time_in_mins": entry.time_spent,
        "status": entry.status,
        "remarks": entry.remarks,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/tasks", methods=["POST"], endpoint="create_self_task")
    @login_required
    def create_self_task(actor):
        body = json_body()
        try:
            task_id = container.task_service.create_self_task(
                actor=actor,
                task_name=body.get("task_name"),
                task_date=body.get("date"),
                timeline=body.get("timeline"),
                status=body.get("status") or "",
                task_type=body.get("task_type"),
                time_in_mins=body.get("time_in_mins"),
            )
            return jsonify({"message": "Task created successfully", "task_id": task_id}), 201
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("creating self task failed")
            return server_error()

    @app.route("/tasks/<int:task_id>", methods=["GET"], endpoint="get_self_task")
    @login_required
    def get_self_task(actor, task_id: int):
        try:
            task = container.task_service.get_self_task(actor=actor, task_id=task_id)
            return jsonify({"task": task_json(task)})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("fetching task %s failed", task_id)
            return server_error()

    @app.route("/tasks/<int:task_id>", methods=["PUT"], endpoint="update_self_task")
    @login_required
    def update_self_task(actor, task_id: int):
        try:
            task = container.task_service.update_self_task(actor=actor, task_id=task_id, data=json_body())
            return jsonify({"message": "Task updated successfully", "task": task_json(task)})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("updating task %s failed", task_id)
            return server_error()

    @app.route("/tasks/last-working-day", methods=["GET"], endpoint="last_working_day_tasks")
    @login_required
    def last_working_day_tasks(actor):
        try:
            result = container.task_service.last_working_day(actor=actor)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("last working day lookup failed")
            return server_error()

        result["tasks"] = [task_json(t) for t in result["tasks"]] + [
            _progress_row_json(p) for p in result.pop("progress", [])
        ]
        result["date"] = format_date(result["date"])
        return jsonify(result)

    @app.route("/assign/create", methods=["POST"], endpoint="assign_task")
    @login_required
    def assign_task(actor):
        body = json_body()
        try:
            task_id = container.task_service.assign_task(
                actor=actor,
                assigned_to=body.get("assigned_to"),
                task_name=body.get("task_name"),
                task_date=body.get("date"),
                timeline=body.get("timeline"),
                status=body.get("status") or "",
                remarks=body.get("remarks"),
            )
            return jsonify({"message": "Task assigned successfully", "task_id": task_id}), 201
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("assigning task failed")
            return server_error()
