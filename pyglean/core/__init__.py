"""Core components for the pyglean application.

This package contains the building blocks of the configuration checks: the
shared testing context, the base class for all validators, the configuration
manager, and the orchestrator that runs the validators.
"""
