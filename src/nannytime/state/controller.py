from __future__ import annotations

from flask import Flask, g, jsonify

from ..container import Container
from ..core.constants import TIMER_REFRESH_SECONDS
from ..core.enums import ViewState
from ..core.exceptions import ValidationError
from ..web.common import client_required, json_body, profile_to_dict, shift_to_dict
from .router import resolve_screen


def register(app: Flask, container: Container) -> None:
    login_required = client_required(container)

    def _snapshot() -> dict:
        client = g.client
        state = client.state
        return {
            "success": True,
            "screen": resolve_screen(state).value,
            "view": state.view.value,
            "profile": profile_to_dict(state.profile),
            "active_shift": shift_to_dict(state.active_shift) if state.active_shift else None,
            "elapsed": client.elapsed(),
            "refresh_seconds": TIMER_REFRESH_SECONDS,
            "shift_count": len(state.shifts),
            "last_error": state.last_error,
        }

    @app.route("/api/state", methods=["GET"], endpoint="app_state")
    @login_required
    def app_state():
        return jsonify(_snapshot())

    @app.route("/api/view", methods=["POST"], endpoint="navigate")
    @login_required
    def navigate():
        value = str(json_body().get("view", "")).upper()
        try:
            view = ViewState(value)
        except ValueError:
            raise ValidationError(f"Unknown view: {value}")
        g.client.navigate(view)
        return jsonify(_snapshot())

    @app.route("/api/voice", methods=["POST"], endpoint="voice_command")
    @login_required
    def voice_command():
        transcript = str(json_body().get("transcript", ""))
        action = g.client.handle_voice_command(transcript)
        payload = _snapshot()
        payload["heard"] = transcript
        payload["action"] = action.value if action else None
        return jsonify(payload)
