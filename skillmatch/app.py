import argparse
import asyncio
import json
from pathlib import Path

from . import __version__
from .config import get_settings
from .database import add_job, get_session, init_database, upsert_user_skill
from .env import load_env
from .levels import JOB_LEVEL_LABELS, PROFICIENCY_LABELS, parse_proficiency
from .logger import get_logger
from .matcher import score
from .proficiency import average_aptitude, label_for, proficiency_counts
from .schema import validate_job_record, validate_skill_record
from .sources import (
    ApiSource,
    DatabaseSource,
    FileSource,
    PortalSource,
    find_job,
    gather_inputs,
    load_recommendations,
)
from .storage import save_records


def build_source(args: argparse.Namespace) -> PortalSource:
    settings = args.settings
    if args.jobs_file or args.skills_file:
        return FileSource(args.jobs_file, args.skills_file)
    api_url = args.api_url or settings.api_url
    if api_url:
        return ApiSource(api_url, token=settings.api_token, timeout=settings.timeout)
    return DatabaseSource(Path(args.db) if args.db else settings.db_path)


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db) if args.db else args.settings.db_path


def cmd_init_db(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    init_database(db_path)
    print(f"Database ready: {db_path}")


def cmd_add_job(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    records = payload if isinstance(payload, list) else [payload]

    invalid = 0
    for i, record in enumerate(records):
        errors = validate_job_record(record) if isinstance(record, dict) else ["Record must be an object"]
        if errors:
            invalid += 1
            print(f"Invalid job #{i + 1}:")
            for e in errors:
                print(f" - {e}")
    if invalid:
        raise SystemExit(2)

    db_path = _db_path(args)
    init_database(db_path)
    session = get_session(db_path)
    try:
        for record in records:
            job = add_job(session, record)
            print(f"[added] {job.id}: {job.title} @ {job.company}")
    finally:
        session.close()


def cmd_add_skill(args: argparse.Namespace) -> None:
    record = {"user_id": args.user_id, "skill_name": args.skill, "proficiency": args.proficiency}
    errors = validate_skill_record(record)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    db_path = _db_path(args)
    init_database(db_path)
    session = get_session(db_path)
    try:
        skill = upsert_user_skill(
            session, args.user_id, args.skill, parse_proficiency(args.proficiency).label
        )
        print(f"[saved] {skill.skill_name} ({skill.proficiency}) for user {skill.user_id}")
    finally:
        session.close()


def cmd_list_jobs(args: argparse.Namespace) -> None:
    _, jobs = asyncio.run(gather_inputs(build_source(args)))
    if not jobs:
        print("No jobs found.")
        return
    print(f"Found {len(jobs)} jobs:\n")
    for job in jobs:
        print(f"ID: {job.id}")
        print(f"  Title: {job.title}")
        print(f"  Company: {job.company}")
        print(f"  Location: {job.location}")
        print(f"  Level: {job.level.label if job.level else 'unspecified'}")
        print(f"  Skills: {', '.join(job.skills) or '-'}")
        print()


def cmd_recommend(args: argparse.Namespace) -> None:
    limit = args.limit if args.limit is not None else args.settings.limit
    ranked = asyncio.run(load_recommendations(build_source(args), args.user_id, limit))
    rows = [r.to_dict() for r in ranked]

    if args.output:
        save_records(Path(args.output), rows)
    if args.json:
        print(json.dumps(rows, indent=2, ensure_ascii=False))
        return
    if not ranked:
        print("No recommendations.")
        return
    for i, r in enumerate(ranked, 1):
        b = r.breakdown
        print(f"{i}. {r.job.title} @ {r.job.company} - {b.total}% ({b.label} Match)")
        print(f"   Skills {b.skill_score}/60  Exp {b.experience_score}/20  Track {b.track_score}/20")
        if b.matched_skills:
            print(f"   Matched: {', '.join(sorted(b.matched_skills))}")
    get_logger().log_metrics_summary()


def cmd_score(args: argparse.Namespace) -> None:
    candidate, jobs = asyncio.run(gather_inputs(build_source(args), args.user_id))
    job = find_job(jobs, args.job_id)
    if job is None:
        raise SystemExit(f"Job not found: {args.job_id}")
    breakdown = score(candidate, job)
    get_logger().record_scoring(1, 1)

    if args.json:
        print(json.dumps(breakdown.to_dict(), indent=2))
        return
    print(f"{job.title} @ {job.company}")
    print(f"Total: {breakdown.total}% ({breakdown.label} Match)")
    print(f"  Skills: {breakdown.skill_score}/60")
    print(f"  Experience: {breakdown.experience_score}/20")
    print(f"  Track: {breakdown.track_score}/20")
    print(f"  Matched: {', '.join(sorted(breakdown.matched_skills)) or '-'}")
    get_logger().log_metrics_summary()


def cmd_level(args: argparse.Namespace) -> None:
    candidate, _ = asyncio.run(gather_inputs(build_source(args), args.user_id))
    aptitude = average_aptitude(candidate.skills)
    summary = {
        "skills": len(candidate.skills),
        "aptitude": round(aptitude, 2),
        "level": label_for(aptitude),
        "by_proficiency": proficiency_counts(candidate.skills),
    }
    if args.json:
        print(json.dumps(summary, indent=2))
        return
    print(f"Skill level: {summary['level']} (aptitude {summary['aptitude']}, {summary['skills']} skills)")
    for label, count in summary["by_proficiency"].items():
        print(f"  {label}: {count}")


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--db", help="Path to SQLite store (default: SKILLMATCH_DB or data/portal.db)")
    p.add_argument("--api-url", help="Portal API base URL (or set SKILLMATCH_API_URL)")
    p.add_argument("--jobs-file", help="JSON file with job records")
    p.add_argument("--skills-file", help="JSON file with user-skill records")
    p.add_argument("--json", action="store_true", help="Print machine-readable JSON")


def main(argv=None):
    # Load .env if present (SKILLMATCH_DB, SKILLMATCH_API_URL, etc.)
    load_env()
    settings = get_settings()
    get_logger(level=settings.log_level)

    parser = argparse.ArgumentParser(prog="skillmatch", description="Candidate-job matching and recommendations")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")

    ini = subparsers.add_parser("init-db", help="Create the local SQLite store")
    ini.add_argument("--db", help="Path to SQLite store")
    ini.set_defaults(func=cmd_init_db)

    adj = subparsers.add_parser(
        "add-job",
        help="Validate and store job records from a JSON file",
        description=f"Job levels: {', '.join(JOB_LEVEL_LABELS)}",
    )
    adj.add_argument("--input", required=True, help="JSON file with one job record or a list of them")
    adj.add_argument("--db", help="Path to SQLite store")
    adj.set_defaults(func=cmd_add_job)

    ads = subparsers.add_parser("add-skill", help="Add or update a skill for a user")
    ads.add_argument("--user-id", required=True, type=int, help="User identifier")
    ads.add_argument("--skill", required=True, help="Skill name")
    ads.add_argument("--proficiency", default="Beginner", help=f"One of: {', '.join(PROFICIENCY_LABELS)}")
    ads.add_argument("--db", help="Path to SQLite store")
    ads.set_defaults(func=cmd_add_skill)

    lsj = subparsers.add_parser("list-jobs", help="List the job catalog")
    _add_source_args(lsj)
    lsj.set_defaults(func=cmd_list_jobs)

    rec = subparsers.add_parser("recommend", help="Rank jobs for a user")
    rec.add_argument("--user-id", help="User identifier (omit for an anonymous visitor)")
    rec.add_argument("--limit", type=int, help="Number of recommendations (default: SKILLMATCH_LIMIT or 3)")
    rec.add_argument("--output", help="Also write the ranking to this JSON file")
    _add_source_args(rec)
    rec.set_defaults(func=cmd_recommend)

    sco = subparsers.add_parser("score", help="Show the match breakdown for one job")
    sco.add_argument("--user-id", required=True, help="User identifier")
    sco.add_argument("--job-id", required=True, help="Job identifier")
    _add_source_args(sco)
    sco.set_defaults(func=cmd_score)

    lvl = subparsers.add_parser("level", help="Summarise a user's skill level")
    lvl.add_argument("--user-id", required=True, help="User identifier")
    _add_source_args(lvl)
    lvl.set_defaults(func=cmd_level)

    args = parser.parse_args(argv)
    args.settings = settings

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
