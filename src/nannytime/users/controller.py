from __future__ import annotations

from flask import Flask, jsonify, session

from ..container import Container
from ..web.common import json_body, profile_to_dict


def register(app: Flask, container: Container) -> None:
    def _end_session(token: str) -> None:
        client = container.clients.discard(token)
        if client is not None:
            client.sign_out()
        container.auth_service.sign_out(token)

    def _start_client(action: str):
        body = json_body()
        email = str(body.get("email", ""))
        password = str(body.get("password", ""))

        previous = session.pop("token", None)
        if previous:
            _end_session(previous)

        client = container.clients.new_client()
        try:
            if action == "signup":
                auth_session = client.gate.sign_up(email, password)
            else:
                auth_session = client.gate.sign_in(email, password)
        except Exception:
            client.unmount()
            raise

        container.clients.register(client)
        session.clear()
        session["token"] = auth_session.token
        return jsonify(
            {
                "success": True,
                "user": {"id": auth_session.user_id, "email": auth_session.email},
                "profile": profile_to_dict(client.state.profile),
            }
        )

    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        return _start_client("signup")

    @app.route("/auth/signin", methods=["POST"], endpoint="signin")
    def signin():
        return _start_client("signin")

    @app.route("/auth/signout", methods=["POST"], endpoint="signout")
    def signout():
        token = session.pop("token", None)
        if token:
            _end_session(token)
        return jsonify({"success": True})
