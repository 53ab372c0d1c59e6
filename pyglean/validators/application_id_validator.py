"""Checks the application id and reports the form used in ping URLs."""
from ..core.base_validator import BaseValidator
from ..utils.sanitize import sanitize_application_id
from ..utils.types import is_string, is_undefined


class ApplicationIdValidator(BaseValidator):
    """Checks that an application id is set and shows how it is sanitized.

    Pings are submitted under the sanitized id, so an id that changes when
    sanitized produces a warning: the user may not expect the difference.
    """
    name = "ApplicationId"
    category = "Identity"
    description = "Checks that the application id is a non-empty string."

    def _validate(self) -> None:
        application_id = self.get_setting("application_id")

        if is_undefined(application_id):
            self.add_error("No application id is configured. Set 'application_id'.")
            return
        if not is_string(application_id):
            self.add_error(f"The application id must be a string, got {type(application_id).__name__}.")
            return
        if not application_id.strip():
            self.add_error("The application id must not be empty.")
            return

        sanitized = sanitize_application_id(application_id)
        self.add_info("Sanitized application id", sanitized)
        if sanitized != application_id:
            self.add_warning(f"The application id '{application_id}' will be submitted as '{sanitized}'.")
