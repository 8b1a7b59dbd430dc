"""
Resume Analysis Service

Scores a resume against an optional job description with Gemini and returns
either a parsed analysis or, when the model's answer is not the expected
JSON, the raw text.
"""
import hashlib
import json
import logging
import re
from typing import Any, Optional

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import ValidationError

from config.settings import settings
from resume_studio.schemas.analysis_schema import (
    AnalysisResult,
    ParsedAnalysis,
    ResumeAnalysis,
    UnparsedAnalysis,
)
from resume_studio.utils.circuit_breaker import CircuitBreaker, CircuitBreakerError
from resume_studio.utils.redis_client import RedisClient, cache_key, get_redis

logger = logging.getLogger(__name__)

CACHE_PREFIX = "analysis"


class AnalysisUnavailableError(Exception):
    """The analysis model is not configured or temporarily blocked."""


class AnalysisServiceError(Exception):
    """The analysis model call failed."""


ANALYSIS_PROMPT = """Analyze the following resume against the job description and provide:
1. ATS (Applicant Tracking System) score out of 100
2. Overall assessment score out of 100
3. Key strengths
4. Areas for improvement
5. Specific recommendations

Resume: {resume_text}

Job Description: {job_description}

Please provide the analysis in JSON format with the following structure:
{{
  "atsScore": number,
  "overallScore": number,
  "strengths": ["string"],
  "improvements": ["string"],
  "recommendations": ["string"]
}}

Return ONLY the JSON object, no other text."""


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence, if any."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\s*", "", text)
        text = re.sub(r"\s*```$", "", text)
    return text.strip()


def parse_analysis(response_text: str) -> AnalysisResult:
    """
    Turn the model's answer into a tagged result.

    Anything that is not a JSON object matching ResumeAnalysis comes back
    as UnparsedAnalysis carrying the original text.
    """
    cleaned = strip_code_fences(response_text)

    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError:
        # Model may wrap the object in prose
        match = re.search(r"\{[\s\S]*\}", cleaned)
        if not match:
            return UnparsedAnalysis(raw_text=response_text)
        try:
            payload = json.loads(match.group())
        except json.JSONDecodeError:
            return UnparsedAnalysis(raw_text=response_text)

    if not isinstance(payload, dict):
        return UnparsedAnalysis(raw_text=response_text)

    try:
        return ParsedAnalysis(analysis=ResumeAnalysis.model_validate(payload))
    except ValidationError as e:
        logger.warning(f"Analysis JSON did not match the expected structure: {e.error_count()} error(s)")
        return UnparsedAnalysis(raw_text=response_text)


def _response_text(response: Any) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, list):
        # Multi-part messages: keep the text parts
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return str(content or "")


class ResumeAnalysisService:
    """
    Service for AI resume analysis.

    Key features:
    - ATS and overall scores with strengths, improvements and recommendations
    - Circuit breaker around model calls
    - Parsed analyses cached by a hash of the inputs
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[Any] = None,
        breaker: Optional[CircuitBreaker] = None,
        cache: Optional[RedisClient] = None,
        cache_ttl: Optional[int] = None,
    ):
        """
        Initialize the resume analysis service.

        Args:
            api_key: Google API key. If not provided, reads from settings.
            model: Chat model to use instead of Gemini
            breaker: Circuit breaker guarding model calls
            cache: Redis client for cached analyses
            cache_ttl: Seconds a parsed analysis stays cached
        """
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self._model = model
        self.breaker = breaker or CircuitBreaker(
            name="gemini_api",
            fail_max=settings.analysis_breaker_fail_max,
            reset_timeout=settings.analysis_breaker_reset_timeout,
        )
        self._cache = cache
        self.cache_ttl = cache_ttl if cache_ttl is not None else settings.analysis_cache_ttl_seconds

    @property
    def is_available(self) -> bool:
        return self._model is not None or bool(self.api_key)

    @property
    def model(self):
        """
        Raises:
            AnalysisUnavailableError: If no API key is configured
        """
        if self._model is None:
            if not self.api_key:
                raise AnalysisUnavailableError(
                    "AI service temporarily unavailable. Please configure the Google API key."
                )
            # Initialize LangChain Gemini model
            self._model = ChatGoogleGenerativeAI(
                model=settings.gemini_model,
                google_api_key=self.api_key,
                temperature=0.7,
                max_output_tokens=1000,
                timeout=60,
                max_retries=2,
            )
            logger.info(f"ResumeAnalysisService initialized with model: {settings.gemini_model}")
        return self._model

    @property
    def cache(self) -> RedisClient:
        return self._cache or get_redis()

    def _cache_id(self, resume_text: str, job_description: Optional[str]) -> str:
        digest = hashlib.sha256(
            f"{resume_text}\x00{job_description or ''}".encode("utf-8")
        ).hexdigest()
        return cache_key(CACHE_PREFIX, digest)

    def analyze(self, resume_text: str, job_description: Optional[str] = None) -> AnalysisResult:
        """
        Analyze a resume.

        Args:
            resume_text: Resume as plain text
            job_description: Optional target job description

        Returns:
            ParsedAnalysis or UnparsedAnalysis

        Raises:
            AnalysisUnavailableError: No API key, or the circuit is open
            AnalysisServiceError: The model call failed
        """
        model = self.model

        cache_id = self._cache_id(resume_text, job_description)
        cached = self.cache.get(cache_id)
        if cached is not None:
            logger.debug(f"Analysis cache hit: {cache_id}")
            return ParsedAnalysis(analysis=ResumeAnalysis.model_validate(cached))

        prompt = ANALYSIS_PROMPT.format(
            resume_text=resume_text,
            job_description=job_description or "Not provided",
        )

        try:
            response = self.breaker.call(model.invoke, [HumanMessage(content=prompt)])
        except CircuitBreakerError as e:
            logger.warning(f"Circuit breaker open for Gemini: {e}")
            raise AnalysisUnavailableError(
                "AI service temporarily unavailable. Please try again later."
            ) from e
        except Exception as e:
            logger.error(f"Resume analysis failed: {e}", exc_info=True)
            raise AnalysisServiceError("Failed to get analysis from AI service") from e

        response_text = _response_text(response)
        if not response_text.strip():
            raise AnalysisServiceError("Failed to get analysis from AI service")

        result = parse_analysis(response_text)
        if isinstance(result, ParsedAnalysis):
            self.cache.set(cache_id, result.analysis.model_dump(by_alias=True), ttl=self.cache_ttl)
        else:
            logger.warning("Analysis response was not valid JSON, returning raw text")

        logger.info(f"Resume analysis completed: {result.kind}")
        return result


resume_analysis_service = ResumeAnalysisService()
