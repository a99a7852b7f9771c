from __future__ import annotations

from datetime import tzinfo
from typing import Optional

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import resolve_timezone
from ..container import Container
from ..core.enums import Period
from ..core.exceptions import ValidationError
from ..web.common import client_required
from .service import PayStubService


def _period_arg(value: str | None) -> Period:
    try:
        return Period((value or Period.WEEK.value).upper())
    except ValueError:
        raise ValidationError("period must be WEEK or MONTH")


def _tz_arg(value: str | None) -> Optional[tzinfo]:
    # Without ?tz= the configured TIMEZONE applies.
    return resolve_timezone(value) if value else None


def register(app: Flask, container: Container) -> None:
    login_required = client_required(container)

    def _args() -> dict:
        return {
            "period": _period_arg(request.args.get("period")),
            "tz": _tz_arg(request.args.get("tz")),
        }

    def _stub():
        args = _args()
        stub = g.client.pay_stub(args["period"], tz=args["tz"])
        if stub is None:
            raise ValidationError("Profile is still loading")
        return stub

    @app.route("/api/paystub", methods=["GET"], endpoint="pay_stub")
    @login_required
    def pay_stub():
        return jsonify({"success": True, "pay_stub": _stub().as_dict()})

    @app.route("/api/paystub/note", methods=["POST"], endpoint="pay_stub_note")
    @login_required
    def pay_stub_note():
        args = _args()
        note = g.client.pay_stub_note(args["period"], tz=args["tz"])
        if note is None:
            raise ValidationError("Profile is still loading")
        return jsonify({"success": True, "note": note})

    @app.route("/api/paystub.csv", methods=["GET"], endpoint="pay_stub_csv")
    @login_required
    def pay_stub_csv():
        stub = _stub()
        csv_bytes = PayStubService.to_csv(stub).encode("utf-8-sig")
        filename = f"paystub_{stub.period.value.lower()}_{stub.window.start.strftime('%Y%m%d')}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
