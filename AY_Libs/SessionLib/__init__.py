"""
SessionLib - Edit session

Connects user actions to the crop compositor, the generative edit backend and
the history ledger, and keeps the presented images' display handles current.
"""

from AY_Libs.SessionLib.session_config import SessionConfig
from AY_Libs.SessionLib.edit_backend import EditBackend, coerce_result, identify_mime_type
from AY_Libs.SessionLib.edit_operations import (
    EditOperation,
    EditOperationRegistry,
    register_default_operations,
    create_default_registry,
)
from AY_Libs.SessionLib.edit_session import EditSession, PresentationState

__all__ = [
    "SessionConfig",
    "EditBackend",
    "coerce_result",
    "identify_mime_type",
    "EditOperation",
    "EditOperationRegistry",
    "register_default_operations",
    "create_default_registry",
    "EditSession",
    "PresentationState",
]
