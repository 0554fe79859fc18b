"""Unit tests for AssessmentValidator."""

import pytest

from src.application.services.assessment_validation_service import (
    AssessmentValidator,
    is_valid_financial_year,
)
from src.config.assessment_config import AssessmentConfig
from src.domain.errors.assessment import ValidationError
from src.domain.models.assessment import AssessmentStatus
from src.domain.models.workflow import ProcessInstance
from tests.helpers.builders import (
    make_new_assessment,
    make_property,
    make_request,
    make_stored_assessment,
)


@pytest.fixture
def validator() -> AssessmentValidator:
    return AssessmentValidator(AssessmentConfig())


@pytest.fixture
def workflow_validator() -> AssessmentValidator:
    return AssessmentValidator(AssessmentConfig(workflow_enabled=True))


class TestFinancialYear:
    @pytest.mark.parametrize("value", ["2024-25", "1999-00", "2009-10"])
    def test_valid(self, value: str) -> None:
        assert is_valid_financial_year(value) is True

    @pytest.mark.parametrize("value", ["2024-26", "2024", "24-25", "2024/25", "", None])
    def test_invalid(self, value: str | None) -> None:
        assert is_valid_financial_year(value) is False


class TestValidateCreate:
    def test_valid_request_passes(self, validator: AssessmentValidator) -> None:
        validator.validate_create(make_request(make_new_assessment()), make_property())

    def test_all_violations_reported_together(self, validator: AssessmentValidator) -> None:
        request = make_request(
            make_new_assessment(tenant_id="pb.jalandhar", financial_year="2024-26")
        )

        with pytest.raises(ValidationError) as exc_info:
            validator.validate_create(request, make_property(status="INACTIVE"))

        assert set(exc_info.value.errors) == {
            "INVALID_TENANT",
            "INVALID_FINANCIAL_YEAR",
            "PROPERTY_NOT_ACTIVE",
        }

    def test_system_identifiers_rejected(self, validator: AssessmentValidator) -> None:
        request = make_request(make_new_assessment(assessment_number="AS-1"))

        with pytest.raises(ValidationError) as exc_info:
            validator.validate_create(request, make_property())

        assert "INVALID_CREATE" in exc_info.value.errors


class TestValidateUpdate:
    def test_unchanged_key_passes(self, validator: AssessmentValidator) -> None:
        stored = make_stored_assessment()

        validator.validate_update(
            make_request(make_stored_assessment()), stored, make_property(), False
        )

    def test_key_change_rejected(self, validator: AssessmentValidator) -> None:
        request = make_request(
            make_stored_assessment(property_id="PT-OTHER", financial_year="2025-26")
        )

        with pytest.raises(ValidationError) as exc_info:
            validator.validate_update(request, make_stored_assessment(), make_property(), False)

        assert {"INVALID_UPDATE_PROPERTY", "INVALID_UPDATE_FINANCIAL_YEAR"} <= set(
            exc_info.value.errors
        )

    def test_missing_assessment_number_rejected(self, validator: AssessmentValidator) -> None:
        request = make_request(make_stored_assessment(assessment_number=None))

        with pytest.raises(ValidationError) as exc_info:
            validator.validate_update(request, make_stored_assessment(), make_property(), False)

        assert "INVALID_UPDATE" in exc_info.value.errors

    def test_cancelled_assessment_rejected(self, validator: AssessmentValidator) -> None:
        stored = make_stored_assessment(status=AssessmentStatus.CANCELLED)

        with pytest.raises(ValidationError) as exc_info:
            validator.validate_update(
                make_request(make_stored_assessment()), stored, make_property(), False
            )

        assert "INVALID_UPDATE_STATUS" in exc_info.value.errors

    def test_triggered_update_needs_action_when_workflow_enabled(
        self, workflow_validator: AssessmentValidator
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            workflow_validator.validate_update(
                make_request(make_stored_assessment()),
                make_stored_assessment(),
                make_property(),
                True,
            )

        assert "INVALID_WORKFLOW" in exc_info.value.errors

    def test_triggered_update_with_action_passes(
        self, workflow_validator: AssessmentValidator
    ) -> None:
        request = make_request(make_stored_assessment(workflow=ProcessInstance(action="VERIFY")))

        workflow_validator.validate_update(request, make_stored_assessment(), make_property(), True)

    def test_action_not_required_when_workflow_disabled(
        self, validator: AssessmentValidator
    ) -> None:
        validator.validate_update(
            make_request(make_stored_assessment()), make_stored_assessment(), make_property(), True
        )
