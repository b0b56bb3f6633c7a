"""
Mail Gate Exceptions
"""


class InvalidRecipientError(ValueError):
    """Recipient value is not a usable mail address."""
    pass
