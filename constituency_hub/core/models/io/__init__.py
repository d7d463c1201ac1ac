"""
Pydantic I/O schemas.

``XRead`` models are built from entities with ``model_validate``; ``XCreate``
and ``XUpdate`` validate request bodies. Every endpoint wraps its payload in
:class:`~constituency_hub.core.models.io.common.Envelope`.
"""

from .common import Deleted, Envelope, Label, Pagination, ok

__all__ = ["Deleted", "Envelope", "Label", "Pagination", "ok"]
