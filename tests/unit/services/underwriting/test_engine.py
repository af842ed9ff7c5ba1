"""End-to-end tests for the underwriting engine."""

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from life_underwriting.core.config import UnderwritingSettings
from life_underwriting.models.application import InsuranceApplication, MedicalProfile
from life_underwriting.models.assessment import (
    FinancialJustification,
    MedicalAssessment,
    MedicalRiskClass,
    RiskClass,
    UnderwritingDecision,
    UnderwritingResult,
)
from life_underwriting.services.underwriting import (
    MedicalRiskScorer,
    UnderwritingEngine,
)
from tests.fixtures.application_factory import FIXED_NOW


class TestEvaluate:
    """Test complete evaluations through every component."""

    def test_clean_applicant_approved(self, engine, factory):
        """Healthy 40-year-old engineer is approved as applied."""
        result = engine.evaluate(factory.application(), evaluator_id="uw-17").unwrap()

        assert result.application_id == "APP-0001"
        assert result.decision == UnderwritingDecision.APPROVE_AS_APPLIED
        assert result.decision_rule == "standard_acceptance"
        assert result.medical_assessment.risk_score == 10
        assert result.medical_assessment.risk_class == MedicalRiskClass.SUPER_PREFERRED
        assert result.risk_class == RiskClass.PREFERRED
        assert result.overall_risk_score == Decimal("0.85")
        assert result.recommended_premium == Decimal("425.00")
        assert result.conditions == ()
        assert result.risk_notes == ()
        assert result.additional_requirements == ()
        assert result.is_declined is False
        assert result.evaluator_id == "uw-17"
        assert result.evaluated_at == FIXED_NOW

    def test_moderate_drinker_standard_rates(self, engine, factory):
        """A preferred medical class prices at 0.95 of the base premium."""
        application = factory.application(
            medical=factory.medical(
                lifestyle=factory.lifestyle(alcohol_consumption="MODERATE")
            )
        )
        result = engine.evaluate(application, evaluator_id="uw-17").unwrap()

        assert result.medical_assessment.risk_score == 15
        assert result.medical_assessment.risk_class == MedicalRiskClass.PREFERRED
        assert result.risk_class == RiskClass.STANDARD
        assert result.decision == UnderwritingDecision.APPROVE_AS_APPLIED
        assert result.recommended_premium == Decimal("475.00")

    def test_heart_disease_declined(self, engine, factory):
        """Heart disease pushes the medical class to DECLINED."""
        application = factory.application(
            medical=factory.medical(
                medical_history=[factory.condition("heart disease")]
            )
        )
        result = engine.evaluate(application, evaluator_id="uw-17").unwrap()

        assert result.medical_assessment.risk_score == 110
        assert result.decision == UnderwritingDecision.DECLINE
        assert result.decision_rule == "medical_declined"
        assert result.risk_class == RiskClass.DECLINED
        assert result.is_declined is True
        assert result.additional_requirements == (
            "Physician's statement",
            "Medical records",
            "Cardiac stress test",
            "EKG",
        )
        # Sentinel premium is kept for the audit trail
        assert result.recommended_premium == Decimal("499995.00")

    def test_unjustified_coverage_declined(self, engine, factory):
        """Coverage far beyond income and net worth is declined."""
        application = factory.application(requested_coverage=Decimal("5000000"))
        result = engine.evaluate(application, evaluator_id="uw-17").unwrap()

        assert (
            result.financial_assessment.financial_justification
            == FinancialJustification.INSUFFICIENT_JUSTIFICATION
        )
        assert result.decision == UnderwritingDecision.DECLINE
        assert result.decision_rule == "insufficient_financial_justification"
        assert (
            "Additional financial documentation required for requested coverage amount"
            in result.risk_notes
        )

    def test_smoker_approved_with_rating(self, engine, factory):
        """A smoker lands in the substandard medical class."""
        application = factory.application(medical=factory.medical(is_smoker=True))
        result = engine.evaluate(application, evaluator_id="uw-17").unwrap()

        assert result.medical_assessment.risk_score == 60
        assert result.decision == UnderwritingDecision.APPROVE_WITH_RATING
        assert result.decision_rule == "medical_substandard"
        assert result.conditions == ("Policy issued with 1.25x rating",)
        assert result.recommended_premium == Decimal("625.00")

    def test_older_applicant_postponed(self, engine, factory):
        """Applicants over 50 need an exam before a final decision."""
        application = factory.application(medical=factory.medical(age=55))
        result = engine.evaluate(application, evaluator_id="uw-17").unwrap()

        assert result.medical_assessment.risk_class == MedicalRiskClass.STANDARD
        assert result.medical_assessment.medical_exam_required is True
        assert result.decision == UnderwritingDecision.POSTPONE_PENDING_REQUIREMENTS
        assert result.conditions == ("Medical exam required before final decision",)
        assert result.recommended_premium == Decimal("500.00")

    def test_small_policy_pays_minimum(self, engine, factory):
        """The minimum premium applies to small face amounts."""
        application = factory.application(requested_coverage=Decimal("25000"))
        result = engine.evaluate(application, evaluator_id="uw-17").unwrap()
        assert result.recommended_premium == Decimal("100.00")

    def test_evaluation_is_deterministic(self, engine, factory):
        """The same application and clock give equal results."""
        application = factory.application(
            medical=factory.medical(
                age=48,
                family_history=[factory.family("parent", "stroke", 52)],
                lifestyle=factory.lifestyle(hazardous_activities=["scuba diving"]),
            )
        )
        first = engine.evaluate(application, evaluator_id="uw-17").unwrap()
        second = engine.evaluate(application, evaluator_id="uw-17").unwrap()
        assert first == second

    def test_concurrent_evaluations(self, engine, factory):
        """One engine instance serves concurrent evaluations."""
        applications = [
            factory.application(
                application_id=f"APP-{i:04d}",
                medical=factory.medical(age=25 + i, is_smoker=bool(i % 2)),
            )
            for i in range(16)
        ]
        sequential = [
            engine.evaluate(a, evaluator_id="uw-17").unwrap() for a in applications
        ]

        with ThreadPoolExecutor(max_workers=8) as pool:
            concurrent = list(
                pool.map(
                    lambda a: engine.evaluate(a, evaluator_id="uw-17").unwrap(),
                    applications,
                )
            )

        assert concurrent == sequential

    def test_default_clock_is_utc(self, settings, factory):
        """Without an injected clock the timestamp is timezone-aware."""
        result = (
            UnderwritingEngine(settings)
            .evaluate(factory.application(), evaluator_id="uw-17")
            .unwrap()
        )
        assert result.evaluated_at.tzinfo is not None


class TestInvalidInput:
    """Test entry validation returning InvalidInput."""

    @pytest.mark.parametrize(
        ("medical_overrides", "field"),
        [
            ({"age": -1}, "medical.age"),
            ({"height_inches": 0}, "medical.height_inches"),
            ({"weight_pounds": 0}, "medical.weight_pounds"),
            ({"weight_pounds": -160}, "medical.weight_pounds"),
        ],
    )
    def test_invalid_measurements(self, engine, factory, medical_overrides, field):
        """Impossible measurements are rejected before scoring."""
        payload = factory.payload()
        payload["medical"] = {**payload["medical"], **medical_overrides}

        result = engine.evaluate_payload(payload, evaluator_id="uw-17")

        assert result.is_err()
        assert result.unwrap_err().field == field

    @pytest.mark.parametrize("coverage", ["0", "-500000"])
    def test_non_positive_coverage(self, engine, factory, coverage):
        """Requested coverage must be positive."""
        application = factory.application(requested_coverage=Decimal(coverage))
        result = engine.evaluate(application, evaluator_id="uw-17")
        assert result.unwrap_err().field == "requested_coverage"

    def test_zero_income(self, engine, factory):
        """Financial preconditions surface as InvalidInput."""
        application = factory.application(
            financial=factory.financial(annual_income=Decimal("0"))
        )
        result = engine.evaluate(application, evaluator_id="uw-17")
        assert result.unwrap_err().field == "financial.annual_income"

    def test_blank_evaluator(self, engine, factory):
        """An evaluator id is required for the audit trail."""
        result = engine.evaluate(factory.application(), evaluator_id="   ")
        assert result.unwrap_err().field == "evaluator_id"

    def test_first_violation_reported(self, engine, factory):
        """Checks run in a fixed order and stop at the first failure."""
        application = factory.application(
            requested_coverage=Decimal("0"),
            financial=factory.financial(annual_income=Decimal("0")),
        )
        invalid = engine.evaluate(application, evaluator_id="uw-17").unwrap_err()

        assert invalid.field == "requested_coverage"
        assert invalid.value == "0"
        assert str(invalid) == "requested_coverage: Requested coverage must be positive"

    def test_invalid_input_is_logged(self, engine, factory, caplog):
        """Rejections are logged as warnings."""
        caplog.set_level(logging.WARNING, logger="life_underwriting")
        application = factory.application(requested_coverage=Decimal("-1"))
        engine.evaluate(application, evaluator_id="uw-17")

        assert "APP-0001 rejected" in caplog.text


class TestEvaluatePayload:
    """Test evaluation from raw intake payloads."""

    def test_valid_payload(self, engine, factory):
        """A well-formed payload evaluates like the model."""
        from_payload = engine.evaluate_payload(factory.payload(), evaluator_id="uw-17")
        from_model = engine.evaluate(factory.application(), evaluator_id="uw-17")
        assert from_payload.unwrap() == from_model.unwrap()

    def test_unknown_enum_value(self, engine, factory):
        """An unknown gender code becomes InvalidInput, not an exception."""
        payload = factory.payload()
        payload["applicant"] = {**payload["applicant"], "gender": "unknown-value"}

        result = engine.evaluate_payload(payload, evaluator_id="uw-17")

        assert result.is_err()
        assert result.unwrap_err().field == "applicant.gender"

    def test_missing_section(self, engine, factory):
        """A missing section is reported by its location."""
        payload = factory.payload()
        del payload["financial"]

        result = engine.evaluate_payload(payload, evaluator_id="uw-17")
        assert result.unwrap_err().field == "financial"

    def test_unexpected_field(self, engine, factory):
        """Unknown fields are rejected."""
        result = engine.evaluate_payload(
            factory.payload(priority="rush"), evaluator_id="uw-17"
        )
        assert result.unwrap_err().field == "priority"

    def test_case_insensitive_codes(self, engine, factory):
        """Lower-case enum and state codes are accepted."""
        payload = factory.payload()
        payload["applicant"] = {
            **payload["applicant"],
            "gender": "female",
            "residence_state": "ny",
        }
        result = engine.evaluate_payload(payload, evaluator_id="uw-17").unwrap()
        assert result.rating_factors.geographic == Decimal("1.10")


class TestResultSerialization:
    """Test the downstream JSON contract."""

    def test_json_round_trip(self, engine, factory):
        """Results survive a JSON round trip unchanged."""
        application = factory.application(
            medical=factory.medical(
                medical_history=[factory.condition("DIABETES", severity="controlled")]
            )
        )
        result = engine.evaluate(application, evaluator_id="uw-17").unwrap()

        restored = UnderwritingResult.model_validate_json(result.model_dump_json())
        assert restored == result
        assert restored.recommended_premium == result.recommended_premium

    def test_json_shape(self, engine, factory):
        """Decimals and enums serialise as strings."""
        result = engine.evaluate(factory.application(), evaluator_id="uw-17").unwrap()
        data = result.model_dump(mode="json")

        assert data["decision"] == "APPROVE_AS_APPLIED"
        assert data["recommended_premium"] == "425.00"
        assert data["rating_factors"] == {
            "MEDICAL": "0.85",
            "FINANCIAL": "1.00",
            "OCCUPATION": "1.00",
            "LIFESTYLE": "1.00",
            "GEOGRAPHIC": "1.00",
        }
        assert data["evaluated_at"].startswith("2025-03-14T09:30:00")

    def test_application_round_trip(self, factory):
        """Applications survive a JSON round trip unchanged."""
        application = factory.application(
            medical=factory.medical(
                lifestyle=factory.lifestyle(hazardous_activities=["skydiving"])
            )
        )
        restored = InsuranceApplication.model_validate_json(
            application.model_dump_json()
        )
        assert restored == application


class TestMonitoring:
    """Test evaluation timing logs."""

    def test_slow_evaluation_warns(self, factory, caplog):
        """Evaluations above the engine's configured threshold log a warning."""
        engine = UnderwritingEngine(
            UnderwritingSettings(slow_evaluation_ms=0.000001),
            clock=lambda: FIXED_NOW,
        )
        caplog.set_level(logging.WARNING, logger="life_underwriting")

        engine.evaluate(factory.application(), evaluator_id="uw-17")

        assert "Slow operation underwriting_evaluate" in caplog.text

    def test_injected_threshold_overrides_environment(
        self, factory, caplog, monkeypatch
    ):
        """The engine's own settings decide the threshold, not cached ones."""
        monkeypatch.setenv("UNDERWRITING_SLOW_EVALUATION_MS", "0.000001")
        engine = UnderwritingEngine(
            UnderwritingSettings(slow_evaluation_ms=60000.0),
            clock=lambda: FIXED_NOW,
        )
        caplog.set_level(logging.DEBUG, logger="life_underwriting")

        engine.evaluate(factory.application(), evaluator_id="uw-17")

        assert "Slow operation" not in caplog.text
        assert "Operation underwriting_evaluate completed" in caplog.text

    def test_component_failure_propagates(self, settings, factory, caplog):
        """Unexpected component errors are logged and re-raised."""

        class BrokenScorer(MedicalRiskScorer):
            def score(self, profile: MedicalProfile) -> MedicalAssessment:
                raise RuntimeError("scoring table unavailable")

        engine = UnderwritingEngine(settings, medical_scorer=BrokenScorer())
        caplog.set_level(logging.ERROR, logger="life_underwriting")

        with pytest.raises(RuntimeError, match="scoring table unavailable"):
            engine.evaluate(factory.application(), evaluator_id="uw-17")
        assert "Operation underwriting_evaluate failed" in caplog.text
