"""Woodys: backend service for a woodworking project community."""

__version__ = "1.0.0"
