from __future__ import annotations

from flask import Flask, jsonify

from ..common.api import login_required_for
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = login_required_for(container.auth_service)

    @app.route("/stats", methods=["GET"], endpoint="stats")
    @login_required
    def stats(actor):
        return jsonify(container.stats_service.compute(actor))
