"""Test helpers for the assessment service tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    builders: Factories for requests, assessments, demands and workflow
        definitions

Usage:
    from tests.helpers import FakeTimeAuthority
    from tests.helpers.builders import make_stored_assessment
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority"]
