"""Utility modules for the pyglean application.

This package contains the leaf helpers used everywhere else: runtime type
predicates, string sanitizers and validators, and the test-only gate.
"""
