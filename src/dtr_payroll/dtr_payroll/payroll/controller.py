from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, operator_context_from_request
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payslips/generate", methods=["POST"], endpoint="api_payslips_generate")
    def api_payslips_generate():
        data = request.get_json(silent=True) or {}
        try:
            context = operator_context_from_request()
            employee_ids = data.get("employee_ids") or []
            if not isinstance(employee_ids, list):
                raise ValidationError("employee_ids must be a list")
            if data.get("month") in (None, "") or data.get("year") in (None, ""):
                raise ValidationError("month and year are required")
            try:
                ids = [int(e) for e in employee_ids]
            except (TypeError, ValueError):
                raise ValidationError("employee_ids must be integers") from None

            result = container.payslip_service.generate_payslips(
                ids,
                month=data["month"],
                year=data["year"],
                context=context,
            )
        except Exception as e:
            return error_response(e)

        body = result.to_dict()
        body["success"] = result.generated_count > 0
        return jsonify(body), 200

    @app.route("/api/payslips/<int:employee_id>", methods=["GET"], endpoint="api_payslips_list")
    def api_payslips_list(employee_id: int):
        year = request.args.get("year", type=int)
        try:
            payslips = container.payslip_service.list_payslips(employee_id, year=year)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "payslips": [p.to_dict() for p in payslips]})

    @app.route("/api/payslips/<int:employee_id>/earnings", methods=["GET"], endpoint="api_payslips_earnings")
    def api_payslips_earnings(employee_id: int):
        try:
            total = container.payslip_service.total_earnings(employee_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "employee_id": employee_id, "total_net_pay": str(total)})

    @app.route("/api/payslips/report/<int:report_id>", methods=["DELETE"], endpoint="api_payslips_delete")
    def api_payslips_delete(report_id: int):
        try:
            container.payslip_service.delete_payslip(report_id, context=operator_context_from_request())
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "message": f"Payslip {report_id} deleted"})
