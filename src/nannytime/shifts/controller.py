from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import parse_iso_datetime, parse_optional_datetime
from ..container import Container
from ..core.exceptions import ValidationError
from ..web.common import client_required, json_body, shift_to_dict
from .model import Shift


def _parse_times(body: dict) -> tuple:
    try:
        start = parse_iso_datetime(str(body["start_time"]))
        end = parse_optional_datetime(body.get("end_time"))
    except KeyError:
        raise ValidationError("start_time is required")
    except ValueError:
        raise ValidationError("Invalid date/time format")
    return start, end


def register(app: Flask, container: Container) -> None:
    login_required = client_required(container)

    def _state_payload(**extra) -> dict:
        state = g.client.state
        payload = {
            "success": True,
            "shifts": [shift_to_dict(s) for s in state.shifts],
            "active_shift": shift_to_dict(state.active_shift) if state.active_shift else None,
        }
        payload.update(extra)
        return payload

    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    @login_required
    def list_shifts():
        g.client.load_data()
        return jsonify(_state_payload())

    @app.route("/api/shifts/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        shift = g.client.clock_in()
        return jsonify(_state_payload(shift=shift_to_dict(shift))), 201

    @app.route("/api/shifts/<shift_id>/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out(shift_id: str):
        shift = g.client.clock_out(shift_id)
        return jsonify(_state_payload(shift=shift_to_dict(shift)))

    @app.route("/api/shifts", methods=["POST"], endpoint="add_shift")
    @login_required
    def add_shift():
        notes = json_body().get("notes")
        shift = g.client.add_shift(notes=notes)
        return jsonify(_state_payload(shift=shift_to_dict(shift))), 201

    @app.route("/api/shifts/<shift_id>", methods=["PUT"], endpoint="update_shift")
    @login_required
    def update_shift(shift_id: str):
        body = json_body()
        start, end = _parse_times(body)

        original = next((s for s in g.client.state.shifts if s.shift_id == shift_id), None)
        notes = body["notes"] if "notes" in body else (original.notes if original else None)
        updated = Shift(
            shift_id=shift_id,
            user_id=g.client.state.user_id,
            start_time=start,
            end_time=end,
            notes=notes,
        )
        shift = g.client.update_shift(updated)
        return jsonify(_state_payload(shift=shift_to_dict(shift)))

    @app.route("/api/shifts/<shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @login_required
    def delete_shift(shift_id: str):
        confirmed = request.args.get("confirm", "").lower() in {"1", "true", "yes"}
        if not g.client.delete_shift(shift_id, confirmed=confirmed):
            return jsonify({"success": False, "message": "Please confirm deleting this shift record"}), 409
        return jsonify(_state_payload())
