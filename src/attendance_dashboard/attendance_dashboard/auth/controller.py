from __future__ import annotations

from datetime import timedelta

from flask import Flask, g, jsonify, redirect, request, session, url_for

from ..container import Container

SESSION_KEY = "session_token"
PUBLIC_ENDPOINTS = {"login", "api_login", "healthz", "static"}


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def require_session():
        """Gate every route except login; exposes the token as ``g.session_token``."""
        if request.endpoint in PUBLIC_ENDPOINTS:
            return None

        token = session.get(SESSION_KEY)
        if not token:
            if request.path.startswith("/api/"):
                return jsonify({"error": "Unauthorized"}), 401
            return redirect(url_for("login"))

        g.session_token = token
        return None

    @app.route("/login", methods=["GET"], endpoint="login")
    def login():
        if session.get(SESSION_KEY):
            return redirect(url_for("live_status"))
        return jsonify({"loginRequired": True, "loginEndpoint": url_for("api_login")})

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = request.get_json(silent=True) or {}
        token = container.auth_service.login(data.get("password") or "")

        session.clear()
        session.permanent = True
        app.permanent_session_lifetime = timedelta(hours=container.session_hours)
        session[SESSION_KEY] = token
        return jsonify({"success": True})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/healthz", methods=["GET"], endpoint="healthz")
    def healthz():
        return jsonify({"status": "ok"})
