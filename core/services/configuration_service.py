# =============================================================================
# core/services/configuration_service.py - Public Runtime Settings
# =============================================================================
# Read-only access to runtime settings the client is allowed to see.
#
# Only keys carrying the public prefix are visible, so secrets such as
# SUPABASE_SERVICE_KEY can never be read through this service:
#
#   CATALOG_FEATURED_CHARACTER=goku  ->  get_string("FEATURED_CHARACTER")
#
# Typed accessors replace a generic "get as T" lookup: the caller picks the
# accessor for the type it expects.
# =============================================================================

import logging
import os
from collections.abc import Mapping

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigurationService:
    """
    Typed reader over prefixed settings.

    Args:
        source: Mapping to read from (defaults to the process environment)
        prefix: Prefix every public key carries in the source
    """

    def __init__(self, source: Mapping[str, str] | None = None, prefix: str = "CATALOG_"):
        self.source = source if source is not None else os.environ
        self.prefix = prefix

    def _raw(self, key: str) -> str | None:
        value = self.source.get(f"{self.prefix}{key}")
        logger.debug(f"Retrieved configuration setting {key}")
        return value

    def get_string(self, key: str, default: str = "") -> str:
        value = self._raw(key)
        return default if value is None or value == "" else value

    def get_int(self, key: str, default: int = 0) -> int:
        value = self._raw(key)
        if not value:
            return default
        try:
            return int(value.strip())
        except ValueError:
            logger.warning(f"Configuration setting {key} is not an integer: {value!r}")
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._raw(key)
        if not value:
            return default
        normalized = value.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
        logger.warning(f"Configuration setting {key} is not a boolean: {value!r}")
        return default
