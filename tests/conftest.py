"""Shared fixtures: in-memory storage, a sample résumé, and a scripted LLM provider."""

import json
from typing import List

import pytest

from vitae.contexts.content import Education, Experience, Project, ResumeDocument
from vitae.utils.llm import LLMProvider, LLMResponse
from vitae.utils.local_storage import MemoryStorage


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def sample_document():
    return ResumeDocument(
        full_name="Jane Doe",
        job_title="Platform Engineer",
        email="jane@example.com",
        phone="555-0100",
        location="Denver, CO",
        linkedin="linkedin.com/in/janedoe",
        summary="Engineer with eight years of experience building data platforms.",
        experiences=[
            Experience(
                role="Senior Engineer",
                company="Acme",
                duration="2021 - Present",
                bullets=[
                    "Led migration to Kubernetes",
                    "Cut cloud spend by 30%",
                    "Mentored four engineers",
                ],
            ),
            Experience(
                role="Engineer",
                company="Initech",
                duration="2017 - 2021",
                bullets=["Built ETL pipelines", "Owned on-call rotation"],
            ),
        ],
        education=[Education(degree="BSc Computer Science", institution="CU Boulder", year="2017")],
        skills=["Python", "React", "Docker", "Notion"],
        projects=[Project(name="vitae", description="Résumé theming engine")],
        certifications="AWS Solutions Architect",
    )


class ScriptedProvider(LLMProvider):
    """
    LLMProvider that returns queued responses (or raises queued exceptions) in order.

    Dicts and lists are sent as JSON, strings as-is, LLMResponse objects unchanged.
    """

    _provider_prefix = "scripted"

    def __init__(self, responses: List = None):
        self.update_model("test")
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, response) -> None:
        self.responses.append(response)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.calls.append((system_prompt, user_prompt))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, LLMResponse):
            return response
        if not isinstance(response, str):
            response = json.dumps(response)
        return LLMResponse(content=response, model=self.model, input_tokens=10, output_tokens=20)


@pytest.fixture
def scripted_provider():
    return ScriptedProvider()
