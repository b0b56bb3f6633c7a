"""
GPG Engine Exceptions
"""


class GpgEngineError(Exception):
    """Base exception for GPG engine failures."""
    pass


class InvalidKeyError(GpgEngineError):
    """Key text could not be imported as a usable key."""
    pass


class GpgBinaryNotFoundError(GpgEngineError):
    """The gpg executable could not be run."""
    pass


class EncryptionFailedError(GpgEngineError):
    """gpg ran but reported an encryption failure."""
    pass
