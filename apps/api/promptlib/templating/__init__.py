"""Template variable engine: placeholder extraction, substitution, and use sessions."""

from .session import VariableSession
from .variables import (
    PLACEHOLDER_RE,
    FillMode,
    extract_variables,
    preview_values,
    render,
    substitute_variables,
)

__all__ = [
    "PLACEHOLDER_RE",
    "FillMode",
    "VariableSession",
    "extract_variables",
    "preview_values",
    "render",
    "substitute_variables",
]
