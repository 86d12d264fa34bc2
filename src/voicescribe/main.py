"""FastAPI application entry point."""

from ddtrace import patch_all

from voicescribe.application import create_app

patch_all()

app = create_app()
