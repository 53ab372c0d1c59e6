"""Checks the on/off switches of the SDK."""
from ..core.base_validator import BaseValidator
from ..utils.types import is_boolean, is_undefined


class DebugFlagsValidator(BaseValidator):
    """Checks that the boolean switches are real booleans.

    A string such as "false" in a config file is truthy, which would enable
    the very feature the user meant to disable.
    """
    name = "DebugFlags"
    category = "Debugging"
    description = "Checks that upload_enabled and debug.log_pings are booleans."

    FLAGS = ("upload_enabled", "debug.log_pings")

    def _validate(self) -> None:
        for key in self.FLAGS:
            value = self.get_setting(key)
            if is_undefined(value):
                continue
            if not is_boolean(value):
                self.add_error(f"'{key}' must be true or false, got {value!r}.")
                continue
            self.add_info(key, value)

        if self.get_setting("upload_enabled") is False:
            self.add_warning("Upload is disabled: no pings will be sent.")
