"""Unit tests for ContentService against a scripted provider."""

import pytest

from vitae.contexts.content import ContentService, ContentServiceError, MatchReport
from vitae.utils.llm import LLMResponse

JOB_TEXT = (
    "We are hiring a platform engineer with Kubernetes, Terraform and Python experience "
    "to run our data infrastructure."
)


@pytest.mark.unit
def test_generate_merges_enhanced_fields(scripted_provider):
    """Test that generate overlays the model's fields on the form input."""
    scripted_provider.queue(
        "```json\n"
        '{"summary": "Results-driven engineer.",'
        ' "experiences": [{"role": "Engineer", "company": "Acme", "bullets": ["Shipped X"]}]}\n'
        "```"
    )
    service = ContentService(scripted_provider)

    document = service.generate(
        {
            "fullName": "Jane Doe",
            "email": "jane@example.com",
            "summary": "engineer",
            "experience": [{"role": "Engineer", "company": "Acme", "responsibilities": "Did X."}],
            "projects": [{"name": "vitae", "description": "themes"}],
            "skills": "Python, Go",
        }
    )

    assert document.full_name == "Jane Doe"
    assert document.email == "jane@example.com"
    assert document.summary == "Results-driven engineer."
    assert document.experiences[0].bullets == ["Shipped X"]
    # projects missing from the response keep the form's value
    assert document.projects[0].description == "themes"
    assert document.skills == ["Python", "Go"]


@pytest.mark.unit
def test_rewrite_returns_improvements(scripted_provider):
    """Test that rewrite returns the structured document and its improvements."""
    scripted_provider.queue(
        {"fullName": "Jane Doe", "skills": ["Python"], "improvements": ["Added metrics", "Fixed tense"]}
    )
    service = ContentService(scripted_provider)

    result = service.rewrite("Jane Doe. Engineer at Acme for five years building data platforms.")

    assert result.document.full_name == "Jane Doe"
    assert result.improvements == ["Added metrics", "Fixed tense"]


@pytest.mark.unit
def test_rewrite_rejects_short_input(scripted_provider):
    """Test that rewrite refuses text under the minimum length without calling the provider."""
    service = ContentService(scripted_provider)

    with pytest.raises(ContentServiceError) as exc_info:
        service.rewrite("too short")

    assert exc_info.value.operation == "rewrite"
    assert scripted_provider.calls == []


@pytest.mark.unit
def test_tailor_restores_dropped_fields(scripted_provider, sample_document):
    """Test that tailor restores contact fields and achievements the model dropped."""
    sample_document.achievements = ["Speaker at PyCon"]
    scripted_provider.queue(
        {
            "tailoredResume": {"fullName": "", "summary": "Platform engineer for data infra."},
            "matchAnalysis": {
                "matchScore": 72.6,
                "matchedKeywords": ["Python", "Kubernetes"],
                "missingKeywords": ["Terraform"],
            },
        }
    )
    service = ContentService(scripted_provider)

    result = service.tailor(sample_document, JOB_TEXT)

    assert result.document.summary == "Platform engineer for data infra."
    assert result.document.full_name == "Jane Doe"
    assert result.document.email == "jane@example.com"
    assert result.document.achievements == ["Speaker at PyCon"]
    assert result.match_report.score == 73
    assert result.match_report.score_label == "Good Match"
    assert result.match_report.missing_keywords == ["Terraform"]


@pytest.mark.unit
def test_tailor_rejects_short_job_text(scripted_provider, sample_document):
    """Test that tailor refuses a job description under the minimum length."""
    with pytest.raises(ContentServiceError):
        ContentService(scripted_provider).tailor(sample_document, "Engineer")


@pytest.mark.unit
def test_tailor_without_tailored_resume(scripted_provider, sample_document):
    """Test that a tailor reply without tailoredResume raises ContentServiceError."""
    scripted_provider.queue({"matchAnalysis": {"matchScore": 50}})

    with pytest.raises(ContentServiceError):
        ContentService(scripted_provider).tailor(sample_document, JOB_TEXT)


@pytest.mark.unit
def test_provider_failure_is_wrapped(scripted_provider):
    """Test that provider exceptions are wrapped in ContentServiceError."""
    error = TimeoutError("request timed out")
    scripted_provider.queue(error)

    with pytest.raises(ContentServiceError) as exc_info:
        ContentService(scripted_provider).generate({"fullName": "Jane"})

    assert exc_info.value.original_error is error
    assert len(scripted_provider.calls) == 1


@pytest.mark.unit
def test_unparseable_response(scripted_provider):
    """Test that a reply with no JSON object raises ContentServiceError."""
    scripted_provider.queue("I cannot help with that.")

    with pytest.raises(ContentServiceError) as exc_info:
        ContentService(scripted_provider).generate({"fullName": "Jane"})

    assert exc_info.value.operation == "generate"


@pytest.mark.unit
@pytest.mark.parametrize(
    "score, label",
    [(100, "Excellent Match"), (80, "Excellent Match"), (79, "Good Match"), (60, "Good Match"),
     (40, "Fair Match"), (39, "Needs Improvement"), (0, "Needs Improvement")],
)
def test_score_label(score, label):
    """Test the score label thresholds."""
    assert MatchReport(score=score).score_label == label


@pytest.mark.unit
def test_match_report_clamps_and_tolerates_bad_score():
    """Test that match scores are clamped and non-numeric scores become 0."""
    assert MatchReport.from_dict({"matchScore": 140}).score == 100
    assert MatchReport.from_dict({"matchScore": "n/a"}).score == 0
    assert MatchReport.from_dict({}).matched_keywords == []


@pytest.mark.unit
def test_empty_message_content_is_wrapped(scripted_provider):
    """Test that a reply with no content surfaces as ContentServiceError."""
    scripted_provider.queue(LLMResponse(content=None, model="test", input_tokens=1, output_tokens=0))

    with pytest.raises(ContentServiceError) as exc_info:
        ContentService(scripted_provider).generate({"fullName": "Jane"})

    assert isinstance(exc_info.value.original_error, TypeError)


@pytest.mark.unit
def test_rewrite_skips_entries_that_are_not_objects(scripted_provider):
    """Test that experience and project entries that are not objects are skipped."""
    scripted_provider.queue(
        {
            "fullName": "Jane",
            "experiences": ["Led migration at Acme", {"role": "Engineer", "company": "Acme"}],
            "projects": "vitae",
            "improvements": "Tightened wording",
        }
    )

    result = ContentService(scripted_provider).rewrite(JOB_TEXT)

    assert [e.role for e in result.document.experiences] == ["Engineer"]
    assert result.document.projects == []
    assert result.improvements == []


@pytest.mark.unit
def test_generate_keeps_form_experiences_when_reply_has_none_usable(scripted_provider):
    """Test that unusable experiences in a generate reply keep the form's experiences."""
    scripted_provider.queue({"summary": "Polished.", "experiences": ["not an object"]})
    form = {"fullName": "Jane", "experiences": [{"role": "Engineer", "bullets": ["Built things"]}]}

    document = ContentService(scripted_provider).generate(form)

    assert document.summary == "Polished."
    assert [e.role for e in document.experiences] == ["Engineer"]


@pytest.mark.unit
def test_tailor_with_non_object_match_analysis(scripted_provider, sample_document):
    """Test that a matchAnalysis that is not an object yields an empty report."""
    scripted_provider.queue({"tailoredResume": {"summary": "Tailored."}, "matchAnalysis": [85]})

    result = ContentService(scripted_provider).tailor(sample_document, JOB_TEXT)

    assert result.document.summary == "Tailored."
    assert result.match_report == MatchReport()


@pytest.mark.unit
def test_malformed_reply_is_wrapped(scripted_provider, sample_document, monkeypatch):
    """Test that errors raised while reading a parsed reply become ContentServiceError."""

    def explode(data):
        raise AttributeError("'str' object has no attribute 'get'")

    monkeypatch.setattr(MatchReport, "from_dict", staticmethod(explode))
    scripted_provider.queue({"tailoredResume": {"summary": "Tailored."}, "matchAnalysis": {}})

    with pytest.raises(ContentServiceError) as exc_info:
        ContentService(scripted_provider).tailor(sample_document, JOB_TEXT)

    assert exc_info.value.operation == "tailor"
    assert isinstance(exc_info.value.original_error, AttributeError)
