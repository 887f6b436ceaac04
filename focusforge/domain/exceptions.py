from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class ValidationError(DomainError):
    """Malformed or missing input."""


class ConflictError(DomainError):
    """A unique key is already taken."""


class EmailAlreadyExistsError(ConflictError):
    """A user with this email is already registered."""


class UnauthorizedError(DomainError):
    """Credentials or token were rejected."""


class InvalidCredentialsError(UnauthorizedError):
    """Email/password pair did not authenticate."""


class InvalidTokenError(UnauthorizedError):
    """Session token is malformed, expired or revoked."""


class NotFoundError(DomainError):
    """Referenced entity does not exist."""


class UserNotFoundError(NotFoundError):
    """User id no longer resolves to a user."""
