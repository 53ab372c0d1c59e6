"""Sanitizers and validators for user-supplied configuration strings.

Sanitizers reshape a string into a canonical form and never reject it.
Validators test a string against an acceptance grammar and return a boolean;
they never raise, whatever they are given.
"""
import ipaddress
import logging
import re
from typing import Any, Iterable
from urllib.parse import urlsplit

from .types import is_string

logger = logging.getLogger(__name__)

# Longest value accepted in a custom HTTP header such as X-Debug-ID.
HEADER_MAX_LENGTH = 20
HEADER_VALUE_PATTERN = re.compile(r"[A-Za-z0-9-]+")

SOURCE_TAGS_MAX_COUNT = 5
RESERVED_TAG_PREFIX = "glean"

ALLOWED_URL_SCHEMES = frozenset({"http", "https"})
# One DNS label of a host name, after IDNA encoding.
HOST_LABEL_PATTERN = re.compile(r"[A-Za-z0-9-]{1,63}")

_APPLICATION_ID_SEPARATORS = re.compile(r"[.-]+")


def sanitize_application_id(application_id: str) -> str:
    """Converts an application id into the form used in ping URLs.

    The id is lowercased and every run of dots or hyphens becomes a single
    hyphen, so "org.mozilla..Test---App" becomes "org-mozilla-test-app".

    Args:
        application_id (str): The raw application id.

    Returns:
        str: The sanitized application id.
    """
    return _APPLICATION_ID_SEPARATORS.sub("-", application_id.lower())


def validate_url(url: Any) -> bool:
    """Checks that a value is an absolute http(s) URL with a host.

    Args:
        url (Any): The candidate URL.

    Returns:
        bool: True if the URL can be used as a server endpoint.
    """
    if not is_string(url):
        return False
    try:
        parts = urlsplit(url)
        # Accessing the port validates it; out-of-range values raise.
        parts.port
    except ValueError as e:
        logger.debug(f"Rejected URL {url!r}: {e}")
        return False

    if parts.scheme.lower() not in ALLOWED_URL_SCHEMES:
        logger.debug(f"Rejected URL {url!r}: unsupported scheme {parts.scheme!r}")
        return False
    if not parts.hostname:
        logger.debug(f"Rejected URL {url!r}: no host")
        return False
    if not _is_valid_host(parts.hostname):
        logger.debug(f"Rejected URL {url!r}: invalid host {parts.hostname!r}")
        return False
    return True


def _is_valid_host(host: str) -> bool:
    """Checks a URL host: an IP address or dot-separated DNS labels."""
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    try:
        ascii_host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    labels = ascii_host[:-1].split(".") if ascii_host.endswith(".") else ascii_host.split(".")
    return all(HOST_LABEL_PATTERN.fullmatch(label) for label in labels)


def validate_header(value: Any, max_length: int = HEADER_MAX_LENGTH) -> bool:
    """Checks that a value can be sent as a raw HTTP header value.

    Accepted values are non-empty, at most `max_length` characters long and
    made only of ASCII letters, digits and hyphens.

    Args:
        value (Any): The candidate header value.
        max_length (int): The longest accepted value.

    Returns:
        bool: True if the value is a valid header value.
    """
    if not is_string(value) or not value:
        return False
    if len(value) > max_length:
        logger.debug(f"Rejected header value {value!r}: longer than {max_length} characters")
        return False
    if HEADER_VALUE_PATTERN.fullmatch(value) is None:
        logger.debug(f"Rejected header value {value!r}: invalid characters")
        return False
    return True


def validate_source_tags(
    tags: Iterable[Any],
    max_tags: int = SOURCE_TAGS_MAX_COUNT,
    max_length: int = HEADER_MAX_LENGTH,
) -> bool:
    """Checks a list of source tags sent in the X-Source-Tags header.

    There must be between one and `max_tags` tags. Tags starting with
    "glean" are reserved, and every tag must be a valid header value.

    Args:
        tags (Iterable[Any]): The candidate tags.
        max_tags (int): The largest number of tags accepted.
        max_length (int): The longest accepted tag.

    Returns:
        bool: True if the tags can be sent.
    """
    if is_string(tags):
        logger.warning("Source tags must be a list of strings, not a single string.")
        return False
    try:
        tags = list(tags)
    except TypeError:
        logger.warning(f"Source tags must be a list of strings, got {type(tags).__name__}.")
        return False

    if not 1 <= len(tags) <= max_tags:
        logger.warning(f"A list of 1 to {max_tags} source tags is required, got {len(tags)}.")
        return False

    for tag in tags:
        if is_string(tag) and tag.startswith(RESERVED_TAG_PREFIX):
            logger.warning(f"Source tag {tag!r} is invalid: tags starting with '{RESERVED_TAG_PREFIX}' are reserved.")
            return False
        if not validate_header(tag, max_length=max_length):
            logger.warning(f"Source tag {tag!r} is not a valid header value.")
            return False
    return True
