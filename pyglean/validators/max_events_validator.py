"""Checks the number of events that triggers an events ping."""
from ..core.base_validator import BaseValidator
from ..utils.types import is_integer, is_number, is_undefined


class MaxEventsValidator(BaseValidator):
    """Checks that max_events is a positive integer.

    Integral floats such as 500.0 are accepted and reported as integers.
    """
    name = "MaxEvents"
    category = "Upload"
    description = "Checks that max_events is a positive integer."

    def _validate(self) -> None:
        max_events = self.get_setting("max_events")
        if is_undefined(max_events):
            return

        if not is_number(max_events):
            self.add_error(f"'max_events' must be a number, got {max_events!r}.")
            return
        if not is_integer(max_events):
            self.add_error(f"'max_events' must be a whole number, got {max_events!r}.")
            return
        if max_events < 1:
            self.add_error(f"'max_events' must be at least 1, got {max_events!r}.")
            return
        self.add_info("Max events", int(max_events))
