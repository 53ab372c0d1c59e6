"""Handles the core validation pipeline for pyglean.

This module orchestrates the configuration check, which includes:
1.  Discovering all available `BaseValidator` implementations.
2.  Running all enabled validators concurrently against the configuration.
3.  Aggregating the results.
"""

import os
import pkgutil
import inspect
import logging
from typing import List, Dict, Any, Type
from concurrent.futures import ThreadPoolExecutor

from .config import Config
from .base_validator import BaseValidator
from .. import validators as validators_package
from ..utils.sanitize import sanitize_application_id
from ..utils.types import is_string

# Initialize a logger for this module.
logger = logging.getLogger(__name__)


def discover_validators() -> List[Type[BaseValidator]]:
    """Discovers all validator classes within the `pyglean.validators` module.

    This function iterates through the modules in the `validators` package,
    inspects their members, and collects all classes that are subclasses of
    `BaseValidator` (excluding `BaseValidator` itself).

    Returns:
        List[Type[BaseValidator]]: The discovered validator classes, sorted
        by name.
    """
    validators = set()
    path = os.path.dirname(validators_package.__file__)

    for _, name, _ in pkgutil.iter_modules([path]):
        try:
            module = __import__(f"pyglean.validators.{name}", fromlist=["*"])
        except ImportError as e:
            logger.warning(f"Could not import validator module {name}: {e}")
            continue
        for _, item in inspect.getmembers(module, inspect.isclass):
            if issubclass(item, BaseValidator) and item is not BaseValidator:
                validators.add(item)
    return sorted(validators, key=lambda v: v.name)


def validate_configuration(config: Config) -> Dict[str, Any]:
    """Runs all enabled validators against a configuration.

    Args:
        config (Config): The configuration to check.

    Returns:
        Dict[str, Any]: A dictionary containing the aggregated errors and
        warnings, the per-validator results, and the sanitized application
        id (None if the configured id is not a string).
    """
    all_validators = discover_validators()
    enabled_validators = [v(config) for v in all_validators if config.is_validator_enabled(v.name)]
    logger.info(f"Running {len(enabled_validators)} of {len(all_validators)} validators.")

    with ThreadPoolExecutor(max_workers=len(enabled_validators) or 1) as executor:
        validator_results = list(executor.map(lambda v: v.validate(), enabled_validators))

    aggregated_errors = [err for res in validator_results for err in res.get("errors", [])]
    aggregated_warnings = [warn for res in validator_results for warn in res.get("warnings", [])]
    for error in aggregated_errors:
        logger.debug(f"Configuration error: {error}")

    application_id = config.get("application_id")
    return {
        "application_id": application_id if is_string(application_id) else None,
        "sanitized_application_id": sanitize_application_id(application_id) if is_string(application_id) else None,
        "sources": list(config.loaded_files),
        "errors": aggregated_errors,
        "warnings": aggregated_warnings,
        "validator_results": validator_results,
    }
