"""Checks the URL pings are uploaded to."""
from ..core.base_validator import BaseValidator
from ..utils.sanitize import validate_url
from ..utils.types import is_undefined


class ServerEndpointValidator(BaseValidator):
    """Checks that the server endpoint is an absolute http(s) URL."""
    name = "ServerEndpoint"
    category = "Upload"
    description = "Checks that the server endpoint is a valid http or https URL."

    def _validate(self) -> None:
        endpoint = self.get_setting("server_endpoint")
        if is_undefined(endpoint):
            self.add_error("No server endpoint is configured. Set 'server_endpoint'.")
            return

        if not validate_url(endpoint):
            self.add_error(f"Unable to use '{endpoint}' as the server endpoint: it is not a valid http(s) URL.")
            return

        self.add_info("Server endpoint", endpoint)
        if endpoint.lower().startswith("http://"):
            self.add_warning(f"The server endpoint '{endpoint}' does not use https; pings will be sent unencrypted.")
