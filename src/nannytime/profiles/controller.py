from __future__ import annotations

from flask import Flask, g, jsonify

from ..container import Container
from ..web.common import client_required, json_body, profile_to_dict


def register(app: Flask, container: Container) -> None:
    login_required = client_required(container)

    @app.route("/api/profile", methods=["GET"], endpoint="get_profile")
    @login_required
    def get_profile():
        state = g.client.state
        if state.profile is None:
            state.profile = container.profile_service.get_or_create(state.user_id)
        return jsonify({"success": True, "profile": profile_to_dict(state.profile)})

    @app.route("/api/profile", methods=["PUT"], endpoint="update_profile")
    @login_required
    def update_profile():
        body = json_body()
        profile = g.client.update_profile(
            name=str(body.get("name", "")),
            hourly_rate=body.get("hourly_rate"),
            currency=str(body.get("currency", "")),
        )
        return jsonify({"success": True, "message": "Profile saved!", "profile": profile_to_dict(profile)})
