from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import reference_from_args
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<int:employee_id>/productivity", methods=["GET"], endpoint="employee_productivity")
    def employee_productivity(employee_id: int):
        signal = container.productivity_service.signal_for(employee_id, reference_from_args())
        return jsonify(
            {
                "score": signal.score,
                "band": signal.band.value,
                "streak_days": signal.streak_days,
            }
        )
