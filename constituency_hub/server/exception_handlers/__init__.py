"""
Exception handlers for the Constituency Hub server.

This package contains exception handlers that render domain errors, HTTP
errors, request validation failures and unhandled exceptions as the standard
response envelope, plus a setup function to register them with the FastAPI
application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
