from __future__ import annotations

from flask import Flask, jsonify

from ..common.api import login_required_for
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = login_required_for(container.auth_service)
    inbox = container.notification_service

    @app.route("/notifications", methods=["GET"], endpoint="list_notifications")
    @login_required
    def list_notifications(actor):
        return jsonify([n.to_dict() for n in inbox.list(actor)])

    @app.route("/notifications/mark-all-read", methods=["PUT"], endpoint="mark_all_notifications_read")
    @login_required
    def mark_all_read(actor):
        return jsonify([n.to_dict() for n in inbox.mark_all_read(actor)])

    @app.route("/notifications/<notification_id>/read", methods=["PUT"], endpoint="mark_notification_read")
    @login_required
    def mark_read(actor, notification_id: str):
        return jsonify(inbox.mark_read(actor, notification_id).to_dict())

    @app.route("/notifications/<notification_id>", methods=["DELETE"], endpoint="delete_notification")
    @login_required
    def delete_notification(actor, notification_id: str):
        inbox.delete(actor, notification_id)
        return jsonify({"message": "Notification deleted successfully"})
