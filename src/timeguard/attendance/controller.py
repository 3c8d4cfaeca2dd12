from __future__ import annotations

import io

import qrcode
from flask import Flask, jsonify, request, send_file

from ..common.web import admin_required, current_user_id, json_error, login_required
from ..core.exceptions import BusyError, InvalidQrPayloadError, UserNotFoundError
from ..container import Container
from .lookup import IpLookup, PublicIpLookup, RequestIpLookup, SubmittedGeolocation


def register(app: Flask, container: Container) -> None:
    def _ip_lookup() -> IpLookup:
        if app.config.get("IP_LOOKUP") == "public":
            return PublicIpLookup(app.config["IP_LOOKUP_URL"], timeout=app.config.get("IP_LOOKUP_TIMEOUT", 5))
        return RequestIpLookup(
            request.headers,
            request.remote_addr,
            trust_proxy_headers=bool(app.config.get("TRUST_PROXY_HEADERS")),
        )

    @app.route("/api/qr/checkin", methods=["POST"], endpoint="api_qr_checkin")
    @login_required
    def api_qr_checkin():
        """Validate the scanned office code, then toggle check-in/out."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        scan_error = data.get("error")
        if scan_error:
            return json_error(str(scan_error), 400)

        try:
            container.attendance_service.validate_qr_payload(data.get("code", ""))
        except InvalidQrPayloadError as e:
            return json_error(str(e), 400)

        result = container.attendance_service.toggle(
            current_user_id(),
            ip_lookup=_ip_lookup(),
            geolocation=SubmittedGeolocation(data.get("location")),
        )

        if result.success:
            return jsonify(result.to_dict()), 200
        if isinstance(result.error, BusyError):
            return jsonify(result.to_dict()), 409
        if isinstance(result.error, UserNotFoundError):
            return jsonify(result.to_dict()), 404
        return jsonify(result.to_dict()), 502

    @app.route("/me/logs", endpoint="me_logs")
    @login_required
    def me_logs():
        events = container.attendance_service.history_for_user(current_user_id())
        return jsonify({"logs": [e.to_dict() for e in events]})

    @app.route("/admin/logs", endpoint="admin_logs")
    @admin_required
    def admin_logs():
        events = container.attendance_service.all_logs()
        return jsonify({"logs": [e.to_dict() for e in events]})

    @app.route("/admin/reset", methods=["POST"], endpoint="admin_reset")
    @admin_required
    def admin_reset():
        deleted = container.attendance_service.reset_logs()
        return jsonify({"success": True, "deleted": deleted})

    @app.route("/admin/qr/image", endpoint="admin_qr_image")
    @admin_required
    def admin_qr_image():
        """PNG of the office QR code employees scan."""
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(app.config["QR_TOKEN"])
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)

        return send_file(buf, mimetype="image/png")
