"""ASGI entrypoint: ``uvicorn greeny_auth.main:app``."""

from greeny_auth.core.application import create_application

app = create_application()
