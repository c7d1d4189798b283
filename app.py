"""ASGI entrypoint: ``uvicorn app:app``."""
from woodys.api.main import app  # noqa: F401
