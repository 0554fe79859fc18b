"""
Property Assessment Lifecycle

Creates and updates property tax assessments: uniqueness per property and
financial year, workflow routing driven by field-level diffs, tax
calculation triggers, stale demand retirement and event publication.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
