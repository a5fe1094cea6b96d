"""
Environment configuration for block model fields.

Settings are read from the process environment (optionally seeded from a
.env file) each time they are requested, so tests and embedding apps can
change them at runtime.
"""

import logging
import os
from datetime import tzinfo

from dateutil import tz
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# IANA zone name used by the canonical date formatter
TIMEZONE_ENV = "BLOCKMODEL_TIMEZONE"


def get_field_timezone() -> tzinfo:
    """Return the time zone date fields format and parse in.

    Uses BLOCKMODEL_TIMEZONE when set to a known zone name, otherwise the
    local zone of the process.
    """
    name = os.getenv(TIMEZONE_ENV, "").strip()
    if not name:
        return tz.tzlocal()

    zone = tz.gettz(name)
    if zone is None:
        logger.warning("Unknown time zone %r in %s, using local time", name, TIMEZONE_ENV)
        return tz.tzlocal()
    return zone
