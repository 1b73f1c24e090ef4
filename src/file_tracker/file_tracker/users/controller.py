from __future__ import annotations

from flask import Flask, jsonify
from flask_jwt_extended import set_access_cookies, unset_jwt_cookies

from ..common.api import json_body, login_required_for
from ..container import Container
from .model import profile_dict


def register(app: Flask, container: Container) -> None:
    login_required = login_required_for(container.auth_service)

    @app.route("/auth/register", methods=["POST"], endpoint="auth_register")
    def register_user():
        payload = json_body()
        container.auth_service.register(
            phone_number=payload.get("phoneNumber"),
            password=payload.get("password"),
            first_name=payload.get("firstName"),
            last_name=payload.get("lastName"),
            department=payload.get("department"),
        )
        return jsonify({"message": "User registered successfully"}), 201

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        payload = json_body()
        user = container.auth_service.authenticate(payload.get("phoneNumber"), payload.get("password"))
        token = container.auth_service.issue_token(user)

        resp = jsonify({"message": "Login successful", "token": token, "user": profile_dict(user)})
        set_access_cookies(resp, token)
        return resp

    @app.route("/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        resp = jsonify({"message": "Logged out successfully"})
        unset_jwt_cookies(resp)
        return resp

    @app.route("/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me(actor):
        return jsonify(profile_dict(actor))

    @app.route("/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users(actor):
        return jsonify([profile_dict(u) for u in container.user_service.list_directory()])
