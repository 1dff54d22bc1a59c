from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import format_date
from ..common.http import domain_error, json_body, login_required, server_error
from ..container import Container
from ..core.exceptions import DomainError
from .model import ProgressEntry

logger = logging.getLogger(__name__)


def progress_json(entry: ProgressEntry) -> dict:
    return {
        "id": entry.entry_id,
        "task_id": entry.task_id,
        "changed_at": entry.created_at.isoformat() if entry.created_at else None,
        "history_date": format_date(entry.history_date),
        "time_spent": entry.time_spent,
        "remarks": entry.remarks or "",
        "status": entry.status or "",
        "changed_by": entry.created_by,
    }


def register(app: Flask, container: Container) -> None:
    service = container.progress_service

    @app.route("/task-history/<int:task_id>", methods=["POST"], endpoint="log_task_progress")
    @login_required
    def log_task_progress(actor, task_id: int):
        body = json_body()
        try:
            entry_id = service.log_progress(
                actor=actor,
                task_id=task_id,
                history_date=body.get("history_date"),
                time_spent=body.get("time_spent"),
                remarks=body.get("remarks"),
                status=body.get("status"),
            )
            return jsonify({"message": "Progress logged", "id": entry_id}), 201
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("logging progress for task %s failed", task_id)
            return server_error()

    @app.route("/task-history/<int:task_id>", methods=["GET"], endpoint="task_progress")
    @login_required
    def task_progress(actor, task_id: int):
        try:
            entries = service.task_progress(actor=actor, task_id=task_id)
            return jsonify({"history": [progress_json(e) for e in entries]})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("fetching progress for task %s failed", task_id)
            return server_error()
