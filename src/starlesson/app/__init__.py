"""
Web layer

FastHTML routes for lesson pages and the Datastar update endpoint.
"""

from .dispatcher import App, datastar_script, default_headers, status_message, STATUS_ID
from .datastar import DatastarPayload, extract_datastar_payload

__all__ = [
    'App',
    'datastar_script',
    'default_headers',
    'status_message',
    'STATUS_ID',
    'DatastarPayload',
    'extract_datastar_payload',
]
