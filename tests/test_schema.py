"""
Tests for record validation on the write path.
"""

from skillmatch.schema import validate_job_record, validate_skill_record


class TestValidateJobRecord:
    """Job records must name a title and a company."""

    def test_valid_record(self, job_records):
        for record in job_records:
            assert validate_job_record(record) == []

    def test_missing_required_field(self):
        errors = validate_job_record({"company": "acme"})
        assert any("title" in err.lower() for err in errors)

    def test_empty_string_field(self):
        errors = validate_job_record({"company": "acme", "title": "   "})
        assert len(errors) > 0

    def test_title_too_long(self):
        errors = validate_job_record({"company": "acme", "title": "A" * 256})
        assert any("title" in err.lower() and "length" in err.lower() for err in errors)

    def test_optional_fields_may_be_omitted(self):
        assert validate_job_record({"company": "acme", "title": "engineer"}) == []

    def test_optional_field_wrong_type(self):
        errors = validate_job_record({"company": "acme", "title": "engineer", "level": 2})
        assert any("level" in err for err in errors)

    def test_skills_must_be_list_of_strings(self):
        errors = validate_job_record({"company": "acme", "title": "engineer", "skills": "React"})
        assert any("skills" in err for err in errors)
        errors = validate_job_record({"company": "acme", "title": "engineer", "skills": ["React", 3]})
        assert any("skills" in err for err in errors)

    def test_salary_bounds(self):
        base = {"company": "acme", "title": "engineer"}
        assert any("salary_min" in e for e in validate_job_record({**base, "salary_min": -1}))
        assert any("salary_max" in e for e in validate_job_record({**base, "salary_max": "lots"}))
        assert any(
            "exceed" in e
            for e in validate_job_record({**base, "salary_min": 500, "salary_max": 100})
        )
        assert validate_job_record({**base, "salary_min": 100, "salary_max": 500}) == []


class TestValidateSkillRecord:
    """Skill records on the write path."""

    def test_valid_record(self, skill_records):
        for record in skill_records:
            assert validate_skill_record(record) == []

    def test_missing_user(self):
        errors = validate_skill_record({"skill_name": "Go"})
        assert any("user_id" in err for err in errors)

    def test_blank_name(self):
        errors = validate_skill_record({"user_id": 1, "skill_name": " "})
        assert any("skill_name" in err for err in errors)

    def test_unknown_proficiency(self):
        errors = validate_skill_record({"user_id": 1, "skill_name": "Go", "proficiency": "Wizard"})
        assert any("proficiency" in err.lower() for err in errors)

    def test_proficiency_optional(self):
        assert validate_skill_record({"user_id": 1, "skill_name": "Go"}) == []
