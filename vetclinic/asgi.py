"""
ASGI entry point: ``uvicorn vetclinic.asgi:app``.
"""
from .main import create_app

app = create_app()
