"""Validators for the settings of a Glean-style telemetry SDK.

This package contains the individual validator implementations that are
dynamically discovered and run by the core validation engine. Each module in
this package should contain one or more classes that inherit from
`pyglean.core.base_validator.BaseValidator`.
"""
from .app_metadata_validator import AppMetadataValidator
from .application_id_validator import ApplicationIdValidator
from .debug_flags_validator import DebugFlagsValidator
from .debug_view_tag_validator import DebugViewTagValidator
from .max_events_validator import MaxEventsValidator
from .server_endpoint_validator import ServerEndpointValidator
from .source_tags_validator import SourceTagsValidator
