"""Conversions blueprint module."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Conversions", __name__, description="Currency conversion endpoints")

from . import routes  # noqa: E402,F401
