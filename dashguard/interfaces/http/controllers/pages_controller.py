# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Minimal HTML surface: the sign-in form and the landing page behind the gate."""

from __future__ import annotations

from flask import Blueprint, render_template_string

from dashguard.interfaces.http.gate import current_identity

_LOGIN_PAGE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>Sign in</title></head>
<body>
  <form id="login">
    <input name="username" autocomplete="username" placeholder="Username" required>
    <input name="password" type="password" autocomplete="current-password" placeholder="Password" required>
    <button type="submit">Sign in</button>
    <p id="error" role="alert"></p>
  </form>
  <script>
    document.getElementById("login").addEventListener("submit", async (event) => {
      event.preventDefault();
      const form = new FormData(event.target);
      const res = await fetch("/api/auth/login", {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify({username: form.get("username"), password: form.get("password")}),
      });
      if (res.ok) {
        window.location.assign({{ home_path|tojson }});
      } else {
        const body = await res.json().catch(() => ({}));
        document.getElementById("error").textContent = body.error || "Sign in failed";
      }
    });
  </script>
</body>
</html>
"""

_HOME_PAGE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>Dashboard</title></head>
<body>
  <p>Signed in as <strong>{{ username }}</strong></p>
  <button id="logout">Sign out</button>
  <script>
    document.getElementById("logout").addEventListener("click", async () => {
      await fetch("/api/auth/logout", {method: "POST"});
      window.location.assign({{ login_path|tojson }});
    });
  </script>
</body>
</html>
"""


class PagesController:
    def __init__(self, *, login_path: str, home_path: str) -> None:
        self._login_path = login_path
        self._home_path = home_path

    def login_page(self):
        return render_template_string(_LOGIN_PAGE, home_path=self._home_path)

    def home_page(self):
        identity = current_identity()
        username = identity.username if identity else ""
        return render_template_string(_HOME_PAGE, username=username, login_path=self._login_path)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("pages", __name__)
        bp.add_url_rule(self._login_path, view_func=self.login_page, methods=["GET"])
        bp.add_url_rule(self._home_path, view_func=self.home_page, methods=["GET"])
        return bp
