"""Domain exceptions.

Every error carries the HTTP status it maps to so the request boundary can
translate it without a lookup table.
"""


class ParadoxError(Exception):
    """Base class for all game errors."""
    status_code = 400
    default_message = 'Request failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ParadoxError):
    """Malformed or missing input."""
    default_message = 'Invalid request'


class ConflictError(ParadoxError):
    """Duplicate submission, or an action the round's state no longer allows."""
    default_message = 'Conflicting request'


class InsufficientFundsError(ParadoxError):
    """Bid exceeds the team's balance."""
    default_message = 'Insufficient balance'


class AuthError(ParadoxError):
    status_code = 401
    default_message = 'Unauthorized'


class PersistenceError(ParadoxError):
    """The store failed; the transaction was rolled back."""
    status_code = 500
    default_message = 'Database operation failed'
