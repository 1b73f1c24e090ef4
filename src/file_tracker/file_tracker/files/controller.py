from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import json_body, login_required_for
from ..common.validators import parse_limit
from ..container import Container
from .model import FileFields


def register(app: Flask, container: Container) -> None:
    login_required = login_required_for(container.auth_service)
    files = container.file_service

    @app.route("/files", methods=["POST"], endpoint="create_file")
    @login_required
    def create_file(actor):
        record = files.create(actor, FileFields.from_payload(json_body()))
        return jsonify({"message": "File created successfully", "file": record.to_dict()}), 201

    @app.route("/files", methods=["GET"], endpoint="assigned_files")
    @login_required
    def assigned_files(actor):
        limit = parse_limit(request.args.get("limit"))
        return jsonify([v.to_dict() for v in files.list_assigned(actor, limit=limit)])

    @app.route("/files/uploaded", methods=["GET"], endpoint="uploaded_files")
    @login_required
    def uploaded_files(actor):
        return jsonify([v.to_dict() for v in files.list_uploaded(actor)])

    @app.route("/files/all", methods=["GET"], endpoint="all_files")
    @login_required
    def all_files(actor):
        limit = parse_limit(request.args.get("limit"))
        return jsonify([v.to_dict() for v in files.list_all(actor, limit=limit)])

    @app.route("/files/<file_id>", methods=["GET"], endpoint="get_file")
    @login_required
    def get_file(actor, file_id: str):
        return jsonify(files.get(actor, file_id).to_dict())

    @app.route("/files/<file_id>", methods=["PUT"], endpoint="update_file")
    @login_required
    def update_file(actor, file_id: str):
        view = files.update(actor, file_id, FileFields.from_payload(json_body()))
        return jsonify({"message": "File updated successfully", "file": view.to_dict()})

    @app.route("/files/<file_id>", methods=["DELETE"], endpoint="delete_file")
    @login_required
    def delete_file(actor, file_id: str):
        files.delete(actor, file_id)
        return jsonify({"message": "File deleted successfully"})
