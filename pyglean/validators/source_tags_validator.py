"""Checks the tags sent in the X-Source-Tags header."""
from ..core.base_validator import BaseValidator
from ..utils.sanitize import HEADER_MAX_LENGTH, SOURCE_TAGS_MAX_COUNT, validate_source_tags
from ..utils.types import is_undefined


class SourceTagsValidator(BaseValidator):
    """Checks the optional list of source tags."""
    name = "SourceTags"
    category = "Debugging"
    description = "Checks the number and format of source tags."

    def _validate(self) -> None:
        tags = self.get_setting("debug.source_tags")
        if is_undefined(tags):
            return

        max_tags = self.get_limit("validation.max_source_tags", SOURCE_TAGS_MAX_COUNT)
        max_length = self.get_limit("validation.header_max_length", HEADER_MAX_LENGTH)
        if max_tags is None or max_length is None:
            return
        if not validate_source_tags(tags, max_tags=max_tags, max_length=max_length):
            self.add_error(
                f"Invalid source tags {tags!r}. Provide 1 to {max_tags} valid header values "
                "that do not start with 'glean'."
            )
            return
        self.add_info("Source tags", ", ".join(tags))
