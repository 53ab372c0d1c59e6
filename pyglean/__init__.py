"""pyglean: configuration guards for Glean-style telemetry SDKs.

This package provides the type predicates, sanitizers and validators that a
telemetry SDK runs over its configuration values before accepting them, plus
a command-line tool to check a configuration file ahead of time.
"""

from .utils.sanitize import sanitize_application_id, validate_header, validate_source_tags, validate_url
from .utils.testing import test_only
from .utils.types import (
    UNDEFINED,
    is_boolean,
    is_integer,
    is_number,
    is_object,
    is_string,
    is_undefined,
)

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__license__",
    "UNDEFINED",
    "is_boolean",
    "is_integer",
    "is_number",
    "is_object",
    "is_string",
    "is_undefined",
    "sanitize_application_id",
    "test_only",
    "validate_header",
    "validate_source_tags",
    "validate_url",
]
