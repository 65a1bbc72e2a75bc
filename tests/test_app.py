"""
Tests for the command line interface.
"""

import json

import pytest

from skillmatch import __version__
from skillmatch.app import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run every command from an empty directory with no SKILLMATCH_* settings."""
    for key in ("SKILLMATCH_DB", "SKILLMATCH_API_URL", "SKILLMATCH_API_TOKEN",
                "SKILLMATCH_TIMEOUT", "SKILLMATCH_LOG_LEVEL", "SKILLMATCH_LIMIT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


class TestVersion:

    def test_version(self, capsys):
        main(["--version"])
        assert capsys.readouterr().out.strip() == __version__


class TestFileBackedCommands:
    """Read-only commands over JSON exports."""

    def test_recommend_json(self, capsys, jobs_file, skills_file):
        main(["recommend", "--user-id", "7", "--limit", "2",
              "--jobs-file", str(jobs_file), "--skills-file", str(skills_file), "--json"])

        rows = json.loads(capsys.readouterr().out)
        assert [r["id"] for r in rows] == [1, 3]
        assert rows[0]["total"] == 70
        assert rows[0]["label"] == "Good"

    def test_recommend_text_and_output_file(self, capsys, tmp_path, jobs_file, skills_file):
        out_path = tmp_path / "out" / "ranked.json"
        main(["recommend", "--user-id", "7", "--output", str(out_path),
              "--jobs-file", str(jobs_file), "--skills-file", str(skills_file)])

        out = capsys.readouterr().out
        assert "1. Frontend Developer @ Acme - 70% (Good Match)" in out
        assert len(json.loads(out_path.read_text())) == 3

    def test_recommend_text_logs_session_metrics(self, capsys, tmp_path, jobs_file, skills_file):
        main(["recommend", "--user-id", "7",
              "--jobs-file", str(jobs_file), "--skills-file", str(skills_file)])

        content = next((tmp_path / "logs").glob("skillmatch_*.log")).read_text()
        assert "Recommendation Session Metrics" in content
        assert "Fetches: 2/2 succeeded" in content
        assert "Jobs scored: 3, recommendations served: 3" in content

    def test_score_text_logs_session_metrics(self, capsys, tmp_path, jobs_file, skills_file):
        main(["score", "--user-id", "7", "--job-id", "2",
              "--jobs-file", str(jobs_file), "--skills-file", str(skills_file)])

        assert "Total: 42% (Fair Match)" in capsys.readouterr().out
        content = next((tmp_path / "logs").glob("skillmatch_*.log")).read_text()
        assert "Jobs scored: 1, recommendations served: 1" in content

    def test_recommend_default_limit_from_env(self, capsys, monkeypatch, jobs_file, skills_file):
        monkeypatch.setenv("SKILLMATCH_LIMIT", "1")
        main(["recommend", "--user-id", "7",
              "--jobs-file", str(jobs_file), "--skills-file", str(skills_file), "--json"])
        assert len(json.loads(capsys.readouterr().out)) == 1

    def test_score(self, capsys, jobs_file, skills_file):
        main(["score", "--user-id", "7", "--job-id", "2",
              "--jobs-file", str(jobs_file), "--skills-file", str(skills_file), "--json"])

        breakdown = json.loads(capsys.readouterr().out)
        assert breakdown == {
            "total": 42,
            "skill_score": 20,
            "experience_score": 12,
            "track_score": 10,
            "matched_skills": ["sql"],
            "label": "Fair",
        }

    def test_score_unknown_job(self, jobs_file, skills_file):
        with pytest.raises(SystemExit, match="Job not found"):
            main(["score", "--user-id", "7", "--job-id", "99",
                  "--jobs-file", str(jobs_file), "--skills-file", str(skills_file)])

    def test_level(self, capsys, jobs_file, skills_file):
        main(["level", "--user-id", "7",
              "--jobs-file", str(jobs_file), "--skills-file", str(skills_file), "--json"])

        summary = json.loads(capsys.readouterr().out)
        assert summary["level"] == "Expert"
        assert summary["aptitude"] == 2.5
        assert summary["by_proficiency"]["Expert"] == 1

    def test_level_without_skills(self, capsys, jobs_file, tmp_path):
        main(["level", "--user-id", "7", "--jobs-file", str(jobs_file),
              "--skills-file", str(tmp_path / "none.json")])
        assert "Skill level: N/A" in capsys.readouterr().out


class TestDatabaseCommands:
    """Write path into the local store, then read back."""

    def test_add_job_add_skill_recommend(self, capsys, tmp_path, job_records):
        db = str(tmp_path / "portal.db")
        jobs_in = tmp_path / "new_jobs.json"
        jobs_in.write_text(json.dumps([{k: v for k, v in r.items() if k != "id"} for r in job_records]))

        main(["add-job", "--input", str(jobs_in), "--db", db])
        main(["add-skill", "--user-id", "7", "--skill", "React", "--proficiency", "expert", "--db", db])
        main(["add-skill", "--user-id", "7", "--skill", "SQL", "--proficiency", "Intermediate", "--db", db])
        capsys.readouterr()

        main(["recommend", "--user-id", "7", "--db", db, "--json"])
        rows = json.loads(capsys.readouterr().out)
        titles = [r["title"] for r in rows]
        assert set(titles[:2]) == {"Frontend Developer", "Data Analyst"}
        assert rows[0]["total"] == 70

    def test_add_skill_stores_canonical_label(self, capsys, tmp_path):
        db = str(tmp_path / "portal.db")
        main(["add-skill", "--user-id", "3", "--skill", "Go", "--proficiency", "PROFESSIONAL", "--db", db])
        assert "Go (Professional)" in capsys.readouterr().out

    def test_add_job_help_lists_job_levels(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["add-job", "--help"])
        assert exc.value.code == 0
        assert "Job levels: Entry Level, Mid Level, Senior" in capsys.readouterr().out

    def test_add_job_rejects_invalid(self, capsys, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"company": "acme"}))

        with pytest.raises(SystemExit) as exc:
            main(["add-job", "--input", str(bad), "--db", str(tmp_path / "portal.db")])
        assert exc.value.code == 2
        assert "title" in capsys.readouterr().out

    def test_add_skill_rejects_unknown_proficiency(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["add-skill", "--user-id", "1", "--skill", "Go", "--proficiency", "Wizard",
                  "--db", str(tmp_path / "portal.db")])
        assert exc.value.code == 2

    def test_init_db_and_list_jobs(self, capsys, tmp_path):
        db = str(tmp_path / "portal.db")
        main(["init-db", "--db", db])
        main(["list-jobs", "--db", db])
        assert "No jobs found." in capsys.readouterr().out

    def test_missing_database_still_answers(self, capsys, tmp_path):
        """A failed fetch degrades to an empty recommendation list."""
        main(["recommend", "--user-id", "7", "--db", str(tmp_path / "absent.db")])
        assert "No recommendations." in capsys.readouterr().out
