"""Errors raised by the text-generation client.

Every failure of a generation call is one of these. Call sites catch
``GenerationError``, log it and substitute mock data, so none of them is fatal.
"""

from __future__ import annotations


class GenerationError(RuntimeError):
	"""Base class; ``str(err)`` is safe to show to the user."""


class CredentialError(GenerationError):
	"""Malformed key, or a key the service rejected."""


class RateLimitError(GenerationError):
	pass


class InvalidRequestError(GenerationError):
	pass


class ServiceError(GenerationError):
	"""Transport failure, unexpected status, or an unreadable payload."""
