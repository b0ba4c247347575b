"""Tests for resume builder editing operations."""

import pytest

from careernavigate.domain.resume import (
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeData,
    SkillGroup,
)
from careernavigate.features import builder


@pytest.fixture
def resume():
    return ResumeData(
        experience=(
            ExperienceEntry(id="exp-1", company="Globex", points=("Shipped API",)),
            ExperienceEntry(id="exp-2", company="Initech"),
        ),
        skills=(SkillGroup(id="sk-1", items="Python"),),
    )


class TestEntries:
    """Tests for adding, updating and removing section entries."""

    def test_add_placeholder_entry(self, resume):
        """Test adding without an entry appends a default one with a fresh id."""
        updated = builder.add_entry(resume, "education")

        assert len(updated.education) == 1
        assert updated.education[0].school == "University"
        assert updated.education[0].id
        assert resume.education == ()

    def test_add_given_entry(self, resume):
        """Test a provided entry is appended in order."""
        project = ProjectEntry(name="Tracker")

        updated = builder.add_entry(resume, "projects", project)

        assert updated.projects == (project,)

    def test_add_wrong_entry_type(self, resume):
        """Test entries must match the section type."""
        with pytest.raises(TypeError):
            builder.add_entry(resume, "education", SkillGroup())

    def test_update_entry(self, resume):
        """Test only the addressed entry changes."""
        updated = builder.update_entry(resume, "experience", "exp-2", company="Hooli", role="SRE")

        assert updated.experience[1].company == "Hooli"
        assert updated.experience[1].role == "SRE"
        assert updated.experience[1].id == "exp-2"
        assert updated.experience[0] == resume.experience[0]
        assert resume.experience[1].company == "Initech"

    def test_update_id_refused(self, resume):
        """Test the entry id cannot be changed."""
        with pytest.raises(ValueError, match="id"):
            builder.update_entry(resume, "experience", "exp-1", id="other")

    def test_update_unknown_field_refused(self, resume):
        """Test fields the entry does not have are refused."""
        with pytest.raises(ValueError, match="salary"):
            builder.update_entry(resume, "experience", "exp-1", salary="1M")

    def test_update_missing_id_is_noop(self, resume):
        """Test an unknown id leaves the resume equal."""
        assert builder.update_entry(resume, "skills", "nope", items="Go") == resume

    def test_remove_entry(self, resume):
        """Test removing by id keeps the other entries."""
        updated = builder.remove_entry(resume, "experience", "exp-1")

        assert [e.id for e in updated.experience] == ["exp-2"]
        assert len(resume.experience) == 2

    def test_unknown_section(self, resume):
        """Test sections outside the builder are rejected."""
        with pytest.raises(ValueError, match="Unknown section: hobbies"):
            builder.add_entry(resume, "hobbies")

    def test_update_personal(self, resume):
        """Test personal fields are updated on a copy."""
        updated = builder.update_personal(resume, full_name="Jane Doe", email="jane@example.com")

        assert updated.personal.full_name == "Jane Doe"
        assert updated.personal.email == "jane@example.com"
        assert resume.personal.full_name == ""


class TestPoints:
    """Tests for bullet point editing."""

    def test_add_point(self, resume):
        """Test a point is appended to the addressed entry."""
        updated = builder.add_point(resume, "experience", "exp-1", "Cut latency 40%")

        assert updated.experience[0].points == ("Shipped API", "Cut latency 40%")
        assert updated.experience[1].points == resume.experience[1].points

    def test_update_point(self, resume):
        """Test a point is replaced by index."""
        updated = builder.update_point(resume, "experience", "exp-1", 0, "Shipped v2 API")

        assert updated.experience[0].points == ("Shipped v2 API",)

    def test_remove_point(self, resume):
        """Test a point is removed by index."""
        updated = builder.remove_point(resume, "experience", "exp-1", 0)

        assert updated.experience[0].points == ()
        assert resume.experience[0].points == ("Shipped API",)

    def test_points_only_on_point_sections(self, resume):
        """Test sections without bullet points reject point edits."""
        with pytest.raises(ValueError, match="no bullet points"):
            builder.add_point(resume, "skills", "sk-1", "x")

    def test_default_entry_has_placeholder_point(self):
        """Test new experience entries start with one placeholder point."""
        updated = builder.add_entry(ResumeData(), "experience")

        assert updated.experience[0].points == ("Accomplished X...",)

    def test_entry_ids_unique(self):
        """Test each placeholder entry gets its own id."""
        updated = builder.add_entry(builder.add_entry(ResumeData(), "education"), "education")

        assert updated.education[0].id != updated.education[1].id
        assert isinstance(updated.education[0], EducationEntry)
