"""
Base validator class that all configuration checks inherit from.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, TYPE_CHECKING

from ..utils.types import UNDEFINED, is_integer, is_undefined

if TYPE_CHECKING:
    from .config import Config


class BaseValidator(ABC):
    """Abstract base class for all configuration validators.

    All validators must inherit from this class and implement the `_validate`
    method. Each validator checks one concern of the SDK configuration, such
    as the server endpoint or the debug options, so the orchestrator can run
    any mix of them polymorphically.

    Attributes:
        name (str): The display name of the validator.
        category (str): A category for grouping validators (e.g., "Upload").
        description (str): A brief explanation of what the validator checks.
    """

    name: str = "UnnamedValidator"
    category: str = "General"
    description: str = "No description provided"

    def __init__(self, config: "Config") -> None:
        """Initializes the validator with the configuration to check.

        Args:
            config (Config): The configuration object to check.
        """
        self.config = config
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.info: Dict[str, Any] = {}

    def validate(self) -> Dict[str, Any]:
        """Performs the validation check and returns the results.

        This method wraps the internal `_validate` method so that an
        unexpected exception in one validator is recorded as an error
        instead of aborting the whole run.

        Returns:
            Dict[str, Any]: A dictionary containing the validation results.
        """
        try:
            self._validate()
        except Exception as e:
            self.add_error(f"Validator {self.name} failed: {str(e)}")
        return self.result()

    @abstractmethod
    def _validate(self) -> None:
        """Implements the validation logic.

        Subclasses record their findings with `add_error`, `add_warning`
        and `add_info`.
        """
        raise NotImplementedError("Subclasses must implement _validate()")

    def result(self) -> Dict[str, Any]:
        """Returns the validation results in a standardized dictionary format.

        Returns:
            Dict[str, Any]: A dictionary containing the validator's name,
            category, description, and any findings.
        """
        return {
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info,
        }

    def add_error(self, message: str) -> None:
        """Adds an error message to the validation results.

        An error means the SDK would refuse the configuration.

        Args:
            message (str): The error message to add.
        """
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        """Adds a warning message to the validation results.

        A warning means the SDK would accept the configuration but probably
        not behave the way the user intended.

        Args:
            message (str): The warning message to add.
        """
        self.warnings.append(message)

    def add_info(self, key: str, value: Any) -> None:
        """Adds informational data to the validation results.

        Args:
            key (str): The key for the informational data.
            value (Any): The value of the informational data.
        """
        self.info[key] = value

    def get_setting(self, key: str) -> Any:
        """Reads a setting, returning `UNDEFINED` if it is not set at all.

        Args:
            key (str): The dot-separated configuration key.

        Returns:
            Any: The value of the setting or `UNDEFINED`.
        """
        return self.config.get(key, UNDEFINED)

    def is_set(self, key: str) -> bool:
        """Checks whether a setting was provided, even if set to None."""
        return not is_undefined(self.get_setting(key))

    def get_limit(self, key: str, default: int) -> Optional[int]:
        """Reads a positive integer limit from the `validation` settings.

        A limit that is not a positive whole number is reported as an error.

        Args:
            key (str): The dot-separated configuration key.
            default (int): The value used when the limit is not set.

        Returns:
            Optional[int]: The limit, or None if it is invalid.
        """
        value = self.config.get(key, default)
        if not is_integer(value) or value < 1:
            self.add_error(f"'{key}' must be a positive whole number, got {value!r}.")
            return None
        return int(value)
