"""Errors raised below the route layer."""

from __future__ import annotations


class BackendError(Exception):
    """A call to the storage/auth backend failed (network, constraint, permission)."""


class ValidationFailed(Exception):
    """Input rejected before any backend call was made."""


class NotFound(LookupError):
    """The addressed project or page does not exist for this user."""
