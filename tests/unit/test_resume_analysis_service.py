"""Tests for the AI resume analysis service."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from resume_studio.schemas.analysis_schema import ParsedAnalysis, ResumeAnalysis, UnparsedAnalysis
from resume_studio.services.resume_analysis_service import (
    AnalysisServiceError,
    AnalysisUnavailableError,
    ResumeAnalysisService,
    parse_analysis,
    strip_code_fences,
)
from resume_studio.utils.circuit_breaker import CircuitBreaker
from resume_studio.utils.redis_client import in_process_redis


ANALYSIS_JSON = {
    "atsScore": 82,
    "overallScore": 77.6,
    "strengths": ["Quantified achievements"],
    "improvements": ["Add a skills summary"],
    "recommendations": ["Mention Kubernetes"],
}


def model_answering(text):
    model = MagicMock()
    model.invoke.return_value = SimpleNamespace(content=text)
    return model


def make_service(model, fail_max=5):
    return ResumeAnalysisService(
        api_key="",
        model=model,
        breaker=CircuitBreaker(name="test_gemini", fail_max=fail_max, reset_timeout=60),
        cache=in_process_redis(),
        cache_ttl=60,
    )


@pytest.mark.unit
class TestParseAnalysis:
    """Test turning model output into a result."""

    def test_plain_json(self):
        result = parse_analysis(json.dumps(ANALYSIS_JSON))

        assert isinstance(result, ParsedAnalysis)
        assert result.analysis.ats_score == 82
        assert result.analysis.overall_score == 78

    def test_fenced_json(self):
        result = parse_analysis(f"```json\n{json.dumps(ANALYSIS_JSON)}\n```")

        assert result.kind == "parsed"

    def test_json_wrapped_in_prose(self):
        result = parse_analysis(f"Here is the analysis:\n{json.dumps(ANALYSIS_JSON)}\nGood luck!")

        assert result.kind == "parsed"

    def test_prose_only_is_unparsed(self):
        result = parse_analysis("Your resume looks great overall.")

        assert isinstance(result, UnparsedAnalysis)
        assert result.raw_text == "Your resume looks great overall."

    def test_out_of_range_score_is_unparsed(self):
        """No scores are made up when the answer is malformed."""
        result = parse_analysis(json.dumps({**ANALYSIS_JSON, "atsScore": 140}))

        assert result.kind == "unparsed"

    def test_missing_scores_are_unparsed(self):
        assert parse_analysis('{"strengths": []}').kind == "unparsed"

    def test_strip_code_fences(self):
        assert strip_code_fences("```\n{}\n```") == "{}"
        assert strip_code_fences("  {}  ") == "{}"

    def test_response_shapes(self):
        parsed = ParsedAnalysis(analysis=ResumeAnalysis.model_validate(ANALYSIS_JSON))

        assert parsed.to_response()["analysis"]["atsScore"] == 82
        assert UnparsedAnalysis(raw_text="x").to_response() == {"kind": "unparsed", "rawResponse": "x"}


@pytest.mark.unit
class TestResumeAnalysisService:

    def test_analyze_sends_resume_and_job_description(self):
        model = model_answering(json.dumps(ANALYSIS_JSON))
        service = make_service(model)

        result = service.analyze("Jane Doe, engineer", "Platform engineer role")

        assert result.kind == "parsed"
        messages = model.invoke.call_args[0][0]
        assert "Jane Doe, engineer" in messages[0].content
        assert "Platform engineer role" in messages[0].content

    def test_missing_job_description_is_marked(self):
        model = model_answering(json.dumps(ANALYSIS_JSON))

        make_service(model).analyze("Jane Doe")

        assert "Job Description: Not provided" in model.invoke.call_args[0][0][0].content

    def test_parsed_analysis_is_cached(self):
        model = model_answering(json.dumps(ANALYSIS_JSON))
        service = make_service(model)

        first = service.analyze("resume", "job")
        second = service.analyze("resume", "job")

        assert model.invoke.call_count == 1
        assert second == first

    def test_unparsed_analysis_is_not_cached(self):
        model = model_answering("Looks fine.")
        service = make_service(model)

        service.analyze("resume")
        service.analyze("resume")

        assert model.invoke.call_count == 2

    def test_no_api_key_is_unavailable(self):
        service = ResumeAnalysisService(api_key="", cache=in_process_redis())

        assert not service.is_available
        with pytest.raises(AnalysisUnavailableError):
            service.analyze("resume")

    def test_model_failure_is_service_error(self):
        model = MagicMock()
        model.invoke.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(AnalysisServiceError):
            make_service(model).analyze("resume")

    def test_empty_response_is_service_error(self):
        with pytest.raises(AnalysisServiceError):
            make_service(model_answering("   ")).analyze("resume")

    def test_open_circuit_makes_service_unavailable(self):
        model = MagicMock()
        model.invoke.side_effect = RuntimeError("timeout")
        service = make_service(model, fail_max=2)

        for _ in range(2):
            with pytest.raises(AnalysisServiceError):
                service.analyze("resume")

        with pytest.raises(AnalysisUnavailableError):
            service.analyze("resume")
        assert model.invoke.call_count == 2

    def test_multi_part_content(self):
        model = MagicMock()
        model.invoke.return_value = SimpleNamespace(content=[{"type": "text", "text": json.dumps(ANALYSIS_JSON)}])

        assert make_service(model).analyze("resume").kind == "parsed"
