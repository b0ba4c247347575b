"""Tests for cover letter generation."""

from datetime import date

import pytest

from careernavigate.adapters.exceptions import AdapterTimeoutError
from careernavigate.domain.models import CoverLetterRequest
from careernavigate.domain.resume import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeData,
    SkillGroup,
)
from careernavigate.features import CoverLetterGenerator, MissingInputError, document_title
from careernavigate.features.cover_letter import clean_body
from careernavigate.prompts import PromptRenderer
from tests.helpers import ScriptedChatAdapter


@pytest.fixture
def renderer():
    return PromptRenderer()


@pytest.fixture
def resume():
    return ResumeData(
        personal=PersonalInfo(
            full_name="Jane Doe",
            email="jane@example.com",
            phone="555-0100",
            location="Pune",
            linkedin="linkedin.com/in/janedoe",
        ),
        education=(EducationEntry(major="Computer Science"),),
        experience=(ExperienceEntry(company="Globex", role="Intern"),),
        skills=(SkillGroup(items="Python, SQL"), SkillGroup(category="Tools", items="Git")),
    )


@pytest.fixture
def request_data():
    return CoverLetterRequest(title="Backend Developer", company="Acme", description="Build APIs")


class TestCleanBody:
    """Tests for clean_body()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ('"Dear team, hello."', "Dear team, hello."),
            ("'Single quoted'", "Single quoted"),
            ("```\nFenced body\n```", "Fenced body"),
            ("  Plain body  ", "Plain body"),
            ('She said "hi" today', 'She said "hi" today'),
        ],
    )
    def test_clean_body(self, raw, expected):
        """Test wrapping quotes and fences are removed."""
        assert clean_body(raw) == expected


class TestDocumentTitle:
    """Tests for document_title()."""

    def test_titles(self, resume):
        """Test names are sanitized and suffixed by document type."""
        assert document_title(resume) == "Jane_Doe_Resume"
        assert document_title(resume, "cover_letter") == "Jane_Doe_Cover_Letter"

    def test_title_without_name(self):
        """Test an unnamed resume uses the generic prefix."""
        assert document_title(ResumeData(), "cover_letter") == "My_Cover_Letter"

    def test_special_characters_replaced(self):
        """Test non-alphanumeric characters become underscores."""
        resume = ResumeData(personal=PersonalInfo(full_name="Zoë O'Neil"))

        assert document_title(resume) == "Zo__O_Neil_Resume"


class TestGenerate:
    """Tests for CoverLetterGenerator.generate()."""

    def test_ai_body(self, renderer, resume, request_data):
        """Test the AI body is cleaned and returned."""
        adapter = ScriptedChatAdapter(['"I am excited to apply to Acme."'])

        body = CoverLetterGenerator(adapter, renderer).generate(resume, request_data)

        assert body == "I am excited to apply to Acme."
        assert "CANDIDATE: Jane Doe, Skills: Python, SQL, Git." in adapter.last_prompt
        assert "JOB: Backend Developer at Acme." in adapter.last_prompt
        assert "under 300 words" in adapter.last_prompt

    @pytest.mark.parametrize(
        "title,company", [("", "Acme"), ("Backend Developer", ""), ("  ", "  ")]
    )
    def test_requires_title_and_company(self, renderer, resume, title, company):
        """Test generation is refused without title and company."""
        adapter = ScriptedChatAdapter([])

        with pytest.raises(MissingInputError, match="Job Title and Company Name"):
            CoverLetterGenerator(adapter, renderer).generate(
                resume, CoverLetterRequest(title=title, company=company)
            )

        assert adapter.calls == []

    def test_fallback_on_failure(self, renderer, resume, request_data):
        """Test a failed request produces the template body."""
        adapter = ScriptedChatAdapter([AdapterTimeoutError("timed out", url="x")])

        body = CoverLetterGenerator(adapter, renderer).generate(resume, request_data)

        assert body.startswith(
            "I am writing to express my strong interest in the Backend Developer position at Acme."
        )
        assert "With my background in Computer Science and hands-on experience with Python, SQL" in body
        assert "During my time as a Intern at Globex" in body
        assert "My technical expertise in Python, SQL, Git aligns well" in body
        assert body.endswith("how my qualifications can benefit Acme.")
        assert body.count("\n\n") == 2

    def test_fallback_on_empty_reply(self, renderer, resume, request_data):
        """Test an empty reply also falls back to the template."""
        adapter = ScriptedChatAdapter(['""'])

        body = CoverLetterGenerator(adapter, renderer).generate(resume, request_data)

        assert body.startswith("I am writing to express my strong interest")

    def test_fallback_defaults_for_empty_resume(self, renderer, request_data):
        """Test the template fills gaps when the resume has no entries."""
        body = CoverLetterGenerator(ScriptedChatAdapter([]), renderer).fallback_body(
            ResumeData(), request_data
        )

        assert "background in technology" in body
        assert "hands-on experience with technical skills" in body
        assert "as a recent role at previous company" in body


class TestComposeLetter:
    """Tests for CoverLetterGenerator.compose_letter()."""

    def test_full_letter(self, renderer, resume):
        """Test the letter wraps the body with header and sign-off."""
        request_data = CoverLetterRequest(
            title="Backend Developer", company="Acme", manager="Ms. Rao", address="1 Main St"
        )

        letter = CoverLetterGenerator(ScriptedChatAdapter([]), renderer).compose_letter(
            resume, request_data, "Body text.", letter_date=date(2025, 11, 4)
        )

        lines = letter.splitlines()
        assert lines[:5] == [
            "Jane Doe",
            "555-0100",
            "jane@example.com",
            "Pune",
            "linkedin.com/in/janedoe",
        ]
        assert "November 4, 2025" in lines
        assert "Dear Ms. Rao," in lines
        assert "1 Main St" in lines
        assert "Body text." in lines
        assert lines[-1] == "Jane Doe"
