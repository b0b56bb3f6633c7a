"""
Mail Gate Bootstrap

Builds the gate and its hooks from application settings.
"""

import logging
import warnings
from typing import Optional

from preferences import PreferenceLookup

from .gate import EncryptionGate
from .hooks import MailHooks
from .models import GateConfig

logger = logging.getLogger(__name__)


def create_hooks(settings, preferences: PreferenceLookup) -> MailHooks:
    """Build the mail hooks for the given settings and preference store."""
    config = GateConfig.from_settings(settings)
    logger.info("Mail gate using %s encryption", config.mode.value)
    return MailHooks(EncryptionGate(config, preferences))


def load_extension(settings=None, preferences: Optional[PreferenceLookup] = None) -> MailHooks:
    """
    Deprecated entry point kept for old integrations.

    Use create_hooks() with an explicit settings object instead.
    """
    warnings.warn(
        "load_extension() is deprecated, use create_hooks() instead",
        DeprecationWarning,
        stacklevel=2,
    )
    logger.warning("Deprecated mail gate entry point used")

    if settings is None:
        from config import settings
    if preferences is None:
        from preferences import MemoryPreferenceStore
        preferences = MemoryPreferenceStore()

    return create_hooks(settings, preferences)
