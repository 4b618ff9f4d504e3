"""
Content generation service.

Wraps an LLM provider behind three single-shot operations:

- generate: polish form input into an enhanced résumé
- rewrite: turn pasted/extracted résumé text into a structured, improved résumé
- tailor: adapt an existing résumé to a job description and report the match

The model is asked for a JSON object; everything it returns is normalised
through ResumeDocument.from_dict. Any provider or parsing failure surfaces as a
ContentServiceError. Requests are never retried.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List

from vitae.contexts.content.exceptions import ContentServiceError
from vitae.contexts.content.logger import _log_debug, _log_error, _log_info, _log_success
from vitae.contexts.content.resume_data_structure import CONTACT_FIELDS, ResumeDocument
from vitae.utils.llm import LLMProvider, parse_json_object

MIN_INPUT_LENGTH = 50

# Raised while reading a reply that parsed as JSON but has the wrong shape
_MALFORMED_REPLY_ERRORS = (AttributeError, TypeError, ValueError)

_RESUME_SCHEMA = """{
  "fullName": "...", "jobTitle": "...", "email": "...", "phone": "...", "location": "...",
  "summary": "2-3 sentences",
  "experiences": [{"role": "...", "company": "...", "duration": "...", "bullets": ["..."]}],
  "education": [{"degree": "...", "institution": "...", "year": "..."}],
  "skills": ["..."],
  "projects": [{"name": "...", "description": "..."}],
  "certifications": "..."
}"""

GENERATE_SYSTEM_PROMPT = f"""You are a professional résumé writer producing ATS-friendly content.
Rewrite the summary, experience bullets and project descriptions with strong action verbs and
measurable outcomes. Never invent experience. Respond with JSON containing "summary",
"experiences" and "projects" in this shape:
{_RESUME_SCHEMA}"""

REWRITE_SYSTEM_PROMPT = f"""You are a professional résumé writer. Extract every detail from the
résumé text, reorganise it and improve the wording for ATS parsing. Respond with JSON in this shape,
plus an "improvements" array of short strings describing what you changed:
{_RESUME_SCHEMA}"""

TAILOR_SYSTEM_PROMPT = f"""You are an ATS optimisation specialist. Tailor the résumé to the job
description without inventing experience. Respond with JSON:
{{"tailoredResume": {_RESUME_SCHEMA},
  "matchAnalysis": {{"matchScore": 0-100, "matchedKeywords": [], "missingKeywords": [],
                    "suggestions": [], "strengths": []}}}}"""


def _strings(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value]


@dataclass
class MatchReport:
    """
    How well a tailored résumé matches a job description.

    Attributes:
        score: Match score, 0-100
        matched_keywords: Job keywords present in the résumé
        missing_keywords: Job keywords absent from the résumé
        suggestions: Advice for closing the gaps
        strengths: Points where the résumé already fits well
    """

    score: int = 0
    matched_keywords: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)

    @property
    def score_label(self) -> str:
        if self.score >= 80:
            return "Excellent Match"
        if self.score >= 60:
            return "Good Match"
        if self.score >= 40:
            return "Fair Match"
        return "Needs Improvement"

    @classmethod
    def from_dict(cls, data: Any) -> "MatchReport":
        if not isinstance(data, dict):
            data = {}
        try:
            score = int(round(float(data.get("matchScore", 0))))
        except (TypeError, ValueError):
            score = 0
        return cls(
            score=max(0, min(100, score)),
            matched_keywords=_strings(data.get("matchedKeywords")),
            missing_keywords=_strings(data.get("missingKeywords")),
            suggestions=_strings(data.get("suggestions")),
            strengths=_strings(data.get("strengths")),
        )


@dataclass
class RewriteResult:
    document: ResumeDocument
    improvements: List[str] = field(default_factory=list)


@dataclass
class TailorResult:
    document: ResumeDocument
    match_report: MatchReport


class ContentService:
    """
    Résumé content operations backed by an LLM provider.

    Args:
        provider: Any LLMProvider (see vitae.utils.llm.get_provider)
    """

    def __init__(self, provider: LLMProvider):
        self.provider = provider

    def _ask(self, operation: str, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        _log_info(f"{operation}: calling {self.provider.name}")
        start = time.time()
        try:
            response = self.provider.generate(system_prompt, user_prompt)
        except Exception as e:
            _log_error(f"{operation}: provider call failed: {e}")
            raise ContentServiceError(
                f"Failed to {operation} résumé: {e}", operation=operation, original_error=e
            ) from e

        _log_debug(
            f"{operation}: {response.input_tokens} input / {response.output_tokens} output tokens"
        )
        try:
            data = parse_json_object(response.content)
        except (TypeError, ValueError) as e:
            _log_error(f"{operation}: unparseable response")
            raise ContentServiceError(
                f"Failed to parse the {operation} response", operation=operation, original_error=e
            ) from e

        _log_success(f"{operation}: completed in {time.time() - start:.2f}s")
        return data

    @staticmethod
    def _malformed(operation: str, error: Exception) -> ContentServiceError:
        _log_error(f"{operation}: response has an unexpected shape: {error}")
        return ContentServiceError(
            f"The {operation} response was not in the expected format",
            operation=operation,
            original_error=error,
        )

    @staticmethod
    def _require_length(text: str, what: str, operation: str) -> None:
        if not text or len(text.strip()) < MIN_INPUT_LENGTH:
            raise ContentServiceError(
                f"Please provide a more detailed {what} (at least {MIN_INPUT_LENGTH} characters)",
                operation=operation,
            )

    def generate(self, form_input: Dict[str, Any]) -> ResumeDocument:
        """
        Enhance form input into a polished résumé.

        The model only rewrites summary, experiences and projects; every other
        field is carried over from the form. A field the model leaves out keeps
        the form's value.
        """
        base = ResumeDocument.from_dict(form_input)
        user_prompt = "Please enhance this résumé content:\n\n" + json.dumps(
            base.to_dict(), indent=2
        )
        enhanced = self._ask("generate", GENERATE_SYSTEM_PROMPT, user_prompt)
        try:
            partial = ResumeDocument.from_dict(enhanced)
        except _MALFORMED_REPLY_ERRORS as e:
            raise self._malformed("generate", e) from e

        if partial.summary:
            base.summary = partial.summary
        if partial.experiences:
            base.experiences = partial.experiences
        if partial.projects:
            base.projects = partial.projects
        return base

    def rewrite(self, raw_text: str) -> RewriteResult:
        """Structure and improve free-text résumé content."""
        self._require_length(raw_text, "résumé text", "rewrite")
        user_prompt = f"Please analyze and improve this résumé:\n\n{raw_text.strip()}"
        data = self._ask("rewrite", REWRITE_SYSTEM_PROMPT, user_prompt)
        try:
            improvements = _strings(data.pop("improvements", None))
            document = ResumeDocument.from_dict(data)
        except _MALFORMED_REPLY_ERRORS as e:
            raise self._malformed("rewrite", e) from e
        return RewriteResult(document=document, improvements=improvements)

    def tailor(self, document: ResumeDocument, job_text: str) -> TailorResult:
        """
        Tailor a résumé to a job description.

        Contact fields, achievements and publications the model drops are
        restored from the input document.
        """
        self._require_length(job_text, "job description", "tailor")
        user_prompt = (
            f"JOB DESCRIPTION:\n{job_text.strip()}\n\n"
            f"CURRENT RESUME DATA:\n{json.dumps(document.to_dict(), indent=2)}"
        )
        data = self._ask("tailor", TAILOR_SYSTEM_PROMPT, user_prompt)

        if not isinstance(data.get("tailoredResume"), dict):
            raise ContentServiceError("Response did not contain a tailored résumé", operation="tailor")

        try:
            tailored = ResumeDocument.from_dict(data["tailoredResume"])
            report = MatchReport.from_dict(data.get("matchAnalysis"))
        except _MALFORMED_REPLY_ERRORS as e:
            raise self._malformed("tailor", e) from e

        for name in (*CONTACT_FIELDS, "full_name", "job_title"):
            if not getattr(tailored, name):
                setattr(tailored, name, getattr(document, name))
        if not tailored.achievements:
            tailored.achievements = list(document.achievements)
        if not tailored.publications:
            tailored.publications = list(document.publications)

        return TailorResult(document=tailored, match_report=report)
