from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import format_date
from ..common.http import domain_error, json_body, login_required, server_error
from ..container import Container
from ..core.exceptions import DomainError
from .model import Meeting

logger = logging.getLogger(__name__)


def meeting_json(m: Meeting) -> dict:
    return {
        "meeting_id": m.meeting_id,
        "user_id": m.user_id,
        "meeting_name": m.meeting_name,
        "date": format_date(m.date),
        "dept": m.dept,
        "co_person": m.co_person,
        "time_in_mins": m.time_in_mins,
        "prop_slot": m.prop_slot,
        "status": m.status,
        "notes": m.notes,
    }


def register(app: Flask, container: Container) -> None:
    service = container.meeting_service

    @app.route("/meetings/create", methods=["POST"], endpoint="create_meeting")
    @login_required
    def create_meeting(actor):
        try:
            meeting_id = service.create_meeting(actor=actor, data=json_body())
            return jsonify({"message": "Meeting created successfully", "meeting_id": meeting_id}), 201
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("creating meeting failed")
            return server_error()

    @app.route("/meetings/<int:meeting_id>", methods=["PUT"], endpoint="update_meeting")
    @login_required
    def update_meeting(actor, meeting_id: int):
        try:
            meeting = service.update_meeting(actor=actor, meeting_id=meeting_id, data=json_body())
            return jsonify({"message": "Meeting updated successfully", "meeting": meeting_json(meeting)})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("updating meeting %s failed", meeting_id)
            return server_error()

    @app.route("/meetings/filter", methods=["POST"], endpoint="filter_meetings")
    @login_required
    def filter_meetings(actor):
        body = json_body()
        try:
            meetings = service.filter_meetings(
                actor=actor,
                date_filter=body.get("date_filter"),
                status=body.get("status"),
                custom_date=body.get("custom_date"),
            )
            return jsonify({"meetings": [meeting_json(m) for m in meetings]})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("filtering meetings failed")
            return server_error()
