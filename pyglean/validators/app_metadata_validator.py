"""Checks the optional application metadata sent with every ping."""
from ..core.base_validator import BaseValidator
from ..utils.types import is_string, is_undefined


class AppMetadataValidator(BaseValidator):
    """Checks that app_build, app_display_version and channel are strings."""
    name = "AppMetadata"
    category = "Identity"
    description = "Checks the type of the application metadata fields."

    FIELDS = ("app_build", "app_display_version", "channel")

    def _validate(self) -> None:
        for key in self.FIELDS:
            value = self.get_setting(key)
            if is_undefined(value):
                continue
            if not is_string(value):
                self.add_error(f"'{key}' must be a string, got {type(value).__name__}.")
            elif not value:
                self.add_warning(f"'{key}' is set to an empty string.")
            else:
                self.add_info(key, value)
