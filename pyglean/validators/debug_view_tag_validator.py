"""Checks the tag sent in the X-Debug-ID header."""
from ..core.base_validator import BaseValidator
from ..utils.sanitize import HEADER_MAX_LENGTH, validate_header
from ..utils.types import is_undefined


class DebugViewTagValidator(BaseValidator):
    """Checks that the debug view tag is usable as a header value.

    The debug view tag is optional. When it is set, pings are tagged for the
    Debug Ping Viewer, so it must fit in the X-Debug-ID header.
    """
    name = "DebugViewTag"
    category = "Debugging"
    description = "Checks that the debug view tag is a valid HTTP header value."

    def _validate(self) -> None:
        tag = self.get_setting("debug.debug_view_tag")
        if is_undefined(tag):
            return

        max_length = self.get_limit("validation.header_max_length", HEADER_MAX_LENGTH)
        if max_length is None:
            return
        if not validate_header(tag, max_length=max_length):
            self.add_error(
                f"Invalid debug view tag '{tag}'. It must be 1 to {max_length} characters "
                "made of letters, digits and hyphens."
            )
            return
        self.add_info("Debug view tag", tag)
