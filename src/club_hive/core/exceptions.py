class DomainError(Exception):
    """Base class for errors a use case reports back to its caller.

    The HTTP layer maps each subclass to a status code; nothing here knows about HTTP.
    """


class ValidationError(DomainError):
    """Bad input: a missing field, an unknown status or role, a duplicate request."""


class NotFoundError(DomainError):
    """A referenced club, event, participation, user or notification is absent."""


class AuthenticationError(DomainError):
    """No session, or wrong email/password."""


class AuthorizationError(DomainError):
    """Caller is neither a site admin nor an approved board member where one is required."""
