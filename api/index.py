"""Serverless function entry point (WSGI `app`)."""

from portfolio.serverless import app  # noqa: F401
