"""Configuration module for the assessment service.

This module provides centralized configuration for the assessment lifecycle.

Available Configurations:
- AssessmentConfig: Workflow switch, trigger lists, pagination, topics, hosts
"""

from src.config.assessment_config import (
    DEFAULT_ASSESSMENT_CONFIG,
    TEST_ASSESSMENT_CONFIG,
    AssessmentConfig,
    parse_identifier_list,
)

__all__ = [
    "AssessmentConfig",
    "DEFAULT_ASSESSMENT_CONFIG",
    "TEST_ASSESSMENT_CONFIG",
    "parse_identifier_list",
]
