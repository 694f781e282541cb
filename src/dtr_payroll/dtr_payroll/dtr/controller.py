from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response, operator_context_from_request
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _read_upload() -> str:
        if not request.mimetype.startswith("multipart/"):
            return request.get_data(as_text=True) or ""

        upload = request.files.get("file")
        if upload is not None:
            if upload.filename and not upload.filename.lower().endswith(".csv"):
                raise ValidationError("Please upload a .csv file")
            return upload.read().decode("utf-8-sig")
        raise ValidationError("Missing upload field 'file'")

    def _parse_date(value):
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None

    @app.route("/api/dtr/import", methods=["POST"], endpoint="api_dtr_import")
    def api_dtr_import():
        """Import a DTR CSV (multipart field `file`, or the raw request body)."""
        try:
            text = _read_upload()
            context = operator_context_from_request()
        except (ValidationError, UnicodeDecodeError) as e:
            return jsonify({"success": False, "message": str(e)}), 400

        summary = container.dtr_import_service.import_csv(text, context=context)
        body = summary.to_dict()
        body["success"] = summary.success
        return jsonify(body), 200

    @app.route("/api/dtr/<int:employee_id>", methods=["GET"], endpoint="api_dtr_list")
    def api_dtr_list(employee_id: int):
        try:
            start = _parse_date(request.args.get("start"))
            end = _parse_date(request.args.get("end"))
            records = container.dtr_service.list_records(employee_id, start=start, end=end)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})
