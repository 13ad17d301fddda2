"""Exceptions raised by the JSON helpers.

Helpers raise these to their immediate caller and never translate them into
responses themselves. The original failure, when there is one, is chained
as ``__cause__``.
"""

from __future__ import annotations


class RestfulError(Exception):
    """Base class for restful errors."""


class DecodeError(RestfulError, ValueError):
    """Request body is empty, too large, malformed, or has trailing data."""


class EncodeError(RestfulError, TypeError):
    """Value cannot be represented as JSON."""
