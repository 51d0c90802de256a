"""Preferences blueprint module."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Preferences", __name__, description="Last selected currency pair")

from . import routes  # noqa: E402,F401
