from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import format_date
from ..common.http import domain_error, json_body, login_required, server_error
from ..container import Container
from ..core.exceptions import DomainError
from .model import DeadlineHistoryEntry, DeadlineRequest

logger = logging.getLogger(__name__)


def _history_json(entry: DeadlineHistoryEntry) -> dict:
    return {
        "id": entry.entry_id,
        "old_deadline": format_date(entry.old_deadline),
        "new_deadline": format_date(entry.new_deadline),
        "action": entry.action.value,
        "reason": entry.reason,
        "changed_by": entry.changed_by,
        "changed_at": entry.changed_at.isoformat() if entry.changed_at else None,
    }


def _request_json(req: DeadlineRequest) -> dict:
    return {
        "id": req.request_id,
        "task_id": req.task_id,
        "requested_by": req.requested_by,
        "requested_deadline": format_date(req.requested_deadline),
        "reason": req.reason,
        "status": req.status.value,
        "created_at": req.created_at.isoformat() if req.created_at else None,
        "reviewed_by": req.reviewed_by,
        "reviewed_at": req.reviewed_at.isoformat() if req.reviewed_at else None,
    }


def register(app: Flask, container: Container) -> None:
    service = container.deadline_service

    @app.route("/revise-self-deadline", methods=["POST"], endpoint="revise_self_deadline")
    @login_required
    def revise_self_deadline(actor):
        body = json_body()
        try:
            service.revise_self_deadline(
                actor=actor,
                task_id=body.get("task_id"),
                new_deadline=body.get("new_deadline"),
                reason=body.get("reason"),
            )
            return jsonify({"message": "Deadline revised successfully"})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("self deadline revision failed")
            return server_error()

    @app.route("/revise-self-deadline/<int:task_id>", methods=["GET"], endpoint="self_deadline_history")
    @login_required
    def self_deadline_history(actor, task_id: int):
        try:
            history = service.self_history(actor=actor, task_id=task_id)
            return jsonify({"task_id": task_id, "history": [_history_json(h) for h in history]})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("fetching self deadline history for task %s failed", task_id)
            return server_error()

    @app.route("/revise-master-deadline/request", methods=["POST"], endpoint="request_master_deadline")
    @login_required
    def request_master_deadline(actor):
        body = json_body()
        try:
            request_id = service.request_master_deadline(
                actor=actor,
                task_id=body.get("task_id"),
                new_deadline=body.get("new_deadline"),
                reason=body.get("reason"),
            )
            return jsonify({"message": "Deadline revision request sent", "request_id": request_id})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("deadline revision request failed")
            return server_error()

    @app.route("/revise-master-deadline/review", methods=["POST"], endpoint="review_master_deadline")
    @login_required
    def review_master_deadline(actor):
        body = json_body()
        try:
            status = service.review_master_deadline(
                actor=actor,
                request_id=body.get("request_id"),
                decision=body.get("decision"),
            )
            return jsonify({"message": f"Request {status.value}"})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("deadline revision review failed")
            return server_error()

    @app.route("/revise-master-deadline/<int:task_id>", methods=["GET"], endpoint="master_deadline_history")
    @login_required
    def master_deadline_history(actor, task_id: int):
        try:
            history = service.master_history(actor=actor, task_id=task_id)
            return jsonify({"task_id": task_id, "history": [_history_json(h) for h in history]})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("fetching master deadline history for task %s failed", task_id)
            return server_error()

    @app.route("/revise-master-deadline/requests/pending", methods=["GET"], endpoint="pending_deadline_requests")
    @login_required
    def pending_deadline_requests(actor):
        try:
            rows = service.list_pending_for_reviewer(actor=actor)
        except Exception:
            logger.exception("listing pending deadline requests failed")
            return server_error()
        return jsonify({"requests": [_request_json(r) for r in rows]})

    @app.route("/revise-master-deadline/requests/mine", methods=["GET"], endpoint="my_deadline_requests")
    @login_required
    def my_deadline_requests(actor):
        try:
            rows = service.list_my_requests(actor=actor)
        except Exception:
            logger.exception("listing own deadline requests failed")
            return server_error()
        return jsonify({"requests": [_request_json(r) for r in rows]})
