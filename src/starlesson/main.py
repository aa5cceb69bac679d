"""
ASGI entry point: `uvicorn starlesson.main:app`.
"""

from .config import get_config
from .logging_config import configure_logging
from .tutorial import create_app

config = get_config()
configure_logging(config.logging)

app = create_app(config)
