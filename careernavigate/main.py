"""Main entry point for the CareerNavigate command-line tool."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from careernavigate.adapters import (
    ChatCompletionAdapter,
    SerpApiJobsAdapter,
    build_chat_adapter,
    build_jobs_adapter,
)
from careernavigate.adapters.exceptions import AdapterConfigurationError
from careernavigate.config.environment import EnvironmentConfig
from careernavigate.config.exceptions import ConfigurationError
from careernavigate.config.loader import load_config
from careernavigate.config.models import AppConfig, JobMode
from careernavigate.domain.models import NO_RESUMES_MESSAGE, CoverLetterRequest, ResumeRecord
from careernavigate.domain.resume import ResumeData
from careernavigate.features import (
    CoverLetterGenerator,
    FeatureError,
    JobRecommender,
    JobSearchService,
    LinkedInOptimizer,
    ResumeAnalyzer,
    SkillGapView,
    create_coach,
    create_pathfinder,
    document_title,
)
from careernavigate.features.conversation import Conversation
from careernavigate.logging import get_logger
from careernavigate.logging.config import configure_logging
from careernavigate.persistence import (
    BlobFile,
    BlobStore,
    PersistenceError,
    close_database,
    init_database,
)
from careernavigate.prompts import PromptRenderer

logger = get_logger(__name__, component="cli")

EXIT_COMMANDS = ("exit", "quit")


@dataclass
class AppContext:
    """Everything a command needs, built once per invocation."""

    app_config: AppConfig
    env_config: EnvironmentConfig
    renderer: PromptRenderer
    blob_store: BlobStore
    chat_adapter: ChatCompletionAdapter
    light_adapter: ChatCompletionAdapter
    jobs_adapter: SerpApiJobsAdapter

    def analyzer(self) -> ResumeAnalyzer:
        return ResumeAnalyzer(self.chat_adapter, self.renderer, self.blob_store)

    def close(self) -> None:
        for adapter in (self.chat_adapter, self.light_adapter, self.jobs_adapter):
            adapter.close()


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Args:
        config_path: Path to configuration file (None searches the defaults)
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Apply log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        pass
    elif app_config.logging and app_config.logging.level:
        env_config.log_level = app_config.logging.level
    else:
        env_config.log_level = "INFO"

    return app_config, env_config


def build_context(app_config: AppConfig, env_config: EnvironmentConfig) -> AppContext:
    """Instantiate adapters, renderer and storage from configuration."""
    try:
        chat_adapter = build_chat_adapter(app_config, env_config)
        light_adapter = build_chat_adapter(app_config, env_config, light=True)
    except AdapterConfigurationError as e:
        raise ConfigurationError(
            f"Invalid AI settings: {e}",
            suggestions=["Check AI_API_KEY and the 'ai' section of config.yaml"],
        ) from e

    return AppContext(
        app_config=app_config,
        env_config=env_config,
        renderer=PromptRenderer(),
        blob_store=BlobStore(app_config.storage.blob_dir),
        chat_adapter=chat_adapter,
        light_adapter=light_adapter,
        jobs_adapter=build_jobs_adapter(app_config, env_config),
    )


def _require_record(context: AppContext, resume_id: str) -> ResumeRecord:
    record = context.analyzer().load(resume_id)
    if record is None:
        raise FeatureError(f"Resume not found: {resume_id}")
    return record


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise FeatureError(f"Cannot read {path}: {e}") from e


def _format_score(score: float) -> str:
    return f"{score:g}"


def run_analyze(args: argparse.Namespace, context: AppContext) -> int:
    resume_file = BlobFile.from_path(args.resume)
    image_file = BlobFile.from_path(args.image) if args.image else None

    record = context.analyzer().analyze(
        company_name=args.company,
        job_title=args.job_title,
        job_description=args.job_description,
        resume_text=_read_text(args.text_file),
        resume_file=resume_file,
        image_file=image_file,
        on_status=print,
    )

    feedback = record.typed_feedback
    print(f"\nResume ID: {record.id}")
    score = feedback.overall_score
    print(f"Score: {_format_score(score) if score is not None else 'n/a'}")
    print(f"Role: {feedback.identified_role}")
    if feedback.summary:
        print(f"\n{feedback.summary}")

    print(f"\nATS Score: {_format_score(feedback.ats.score)}")
    for tip in feedback.ats.tips:
        marker = "+" if tip.type == "good" else "-"
        print(f"  {marker} {tip.tip}")
    return 0


def run_history(args: argparse.Namespace, context: AppContext) -> int:
    records = context.analyzer().list_records()
    if not records:
        print(NO_RESUMES_MESSAGE)
        return 0

    for record in records:
        feedback = record.typed_feedback
        score = feedback.overall_score if feedback.overall_score is not None else 0
        print(
            f"{record.id}  {record.company_name or '-'}  {record.job_title or '-'}  "
            f"Score: {_format_score(score)}  ATS: {_format_score(feedback.ats.score)}"
        )
    return 0


def run_jobs(args: argparse.Namespace, context: AppContext) -> int:
    record = _require_record(context, args.resume_id)
    recommender = JobRecommender(
        context.chat_adapter,
        JobSearchService(context.jobs_adapter),
        context.renderer,
        context_chars=context.app_config.ai.keyword_context_chars,
    )
    result = recommender.recommend(record.feedback, JobMode(args.mode))

    if result.status == "error":
        print("Could not load recommendations. Please try again.", file=sys.stderr)
        return 1

    heading = "Internships" if result.mode is JobMode.INTERN else "Jobs"
    print(f"{heading} for: {result.title}")
    if result.message:
        print(result.message)
    for job in result.jobs:
        tags = " [Remote]" if job.is_remote else ""
        print(f"- {job.title} | {job.company_name} | {job.location}{tags}\n  {job.link}")
    return 0


def run_skills(args: argparse.Namespace, context: AppContext) -> int:
    record = _require_record(context, args.resume_id)
    view = SkillGapView.from_feedback(record.feedback)

    print("Skills found on your resume:")
    print(f"  {view.found_message}" if view.found_message else f"  {', '.join(view.found_skills)}")
    print("Skills missing for the job:")
    if view.missing_message:
        print(f"  {view.missing_message}")
    for links in view.missing_skills:
        print(f"  {links.skill}\n    {links.coursera}\n    {links.youtube}\n    {links.docs}")
    return 0


def chat_loop(
    conversation: Conversation,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Interactive loop: one line in, one reply out, until EOF or ``exit``."""
    write(conversation.visible_messages[0].content)
    while True:
        try:
            text = read("\n> ")
        except EOFError:
            break
        if text.strip().lower() in EXIT_COMMANDS:
            break
        if not text.strip():
            continue

        reply = conversation.send(text)
        write(f"\n{reply.content}")
        for step in reply.roadmap or ():
            write(f"\n{step.month}: {step.title}")
            for topic in step.topics:
                write(f"  - {topic}")
            if step.project_idea:
                write(f"  Project: {step.project_idea}")
            write(f"  Resources: {step.resource_search_url}")
    return 0


def run_coach(args: argparse.Namespace, context: AppContext) -> int:
    record = _require_record(context, args.resume_id)
    conversation = create_coach(
        context.chat_adapter,
        context.renderer,
        record.feedback,
        resume_path=record.resume_path,
        blob_store=context.blob_store,
        context_chars=context.app_config.ai.resume_context_chars,
    )
    return chat_loop(conversation)


def run_pathfinder(args: argparse.Namespace, context: AppContext) -> int:
    return chat_loop(create_pathfinder(context.chat_adapter, context.renderer))


def run_linkedin(args: argparse.Namespace, context: AppContext) -> int:
    optimizer = LinkedInOptimizer(context.light_adapter, context.renderer)

    if args.company:
        networking = optimizer.generate_networking(args.company)
        if networking.is_empty:
            print("AI is busy. Please try again.", file=sys.stderr)
            return 1
        print(f"Connection note:\n{networking.message}\n")
        print(f"Search string:\n{networking.search_query}\n")
        print(f"Find recruiters: {networking.recruiter_search_url}")
        return 0

    record = _require_record(context, args.resume_id)
    profile = optimizer.generate_profile(record.feedback)
    if profile.is_empty:
        print("AI is busy. Please try again.", file=sys.stderr)
        return 1
    print(f"Headline:\n{profile.headline}\n")
    print(f"About:\n{profile.about}")
    return 0


def run_cover_letter(args: argparse.Namespace, context: AppContext) -> int:
    resume = ResumeData.model_validate_json(_read_text(args.resume_json))
    request = CoverLetterRequest(
        title=args.title,
        company=args.company,
        manager=args.manager,
        description=args.description,
        address=args.address,
    )
    generator = CoverLetterGenerator(context.chat_adapter, context.renderer)
    letter = generator.compose_letter(resume, request, generator.generate(resume, request))

    if args.output:
        output = args.output
        if output.is_dir():
            output = output / f"{document_title(resume, 'cover_letter')}.txt"
        output.write_text(letter + "\n", encoding="utf-8")
        print(f"Cover letter written to {output}")
    else:
        print(letter)
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, AppContext], int]] = {
    "analyze": run_analyze,
    "history": run_history,
    "jobs": run_jobs,
    "skills": run_skills,
    "coach": run_coach,
    "pathfinder": run_pathfinder,
    "linkedin": run_linkedin,
    "cover-letter": run_cover_letter,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CareerNavigate - AI resume analysis, career coaching and job search"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Upload and analyze a resume")
    analyze.add_argument("--resume", type=Path, required=True, help="Resume document")
    analyze.add_argument(
        "--text-file", type=Path, required=True, help="Plain-text content of the resume"
    )
    analyze.add_argument("--image", type=Path, default=None, help="Rendered first page image")
    analyze.add_argument("--company", default="", help="Target company")
    analyze.add_argument("--job-title", default="", help="Target job title")
    analyze.add_argument("--job-description", default="", help="Target job description")

    subparsers.add_parser("history", help="List analyzed resumes")

    jobs = subparsers.add_parser("jobs", help="Recommend jobs for an analyzed resume")
    jobs.add_argument("resume_id")
    jobs.add_argument("--mode", choices=[m.value for m in JobMode], default=JobMode.JOB.value)

    skills = subparsers.add_parser("skills", help="Show the skill gap of an analyzed resume")
    skills.add_argument("resume_id")

    coach = subparsers.add_parser("coach", help="Chat with the career coach about a resume")
    coach.add_argument("resume_id")

    subparsers.add_parser("pathfinder", help="Chat with the Pathfinder roadmap mentor")

    linkedin = subparsers.add_parser("linkedin", help="LinkedIn profile and recruiter outreach")
    target = linkedin.add_mutually_exclusive_group(required=True)
    target.add_argument("--resume-id", help="Rewrite headline and About from this resume")
    target.add_argument("--company", help="Write a recruiter note for this company")

    cover = subparsers.add_parser("cover-letter", help="Write a cover letter")
    cover.add_argument(
        "--resume-json", type=Path, required=True, help="Resume builder data (JSON)"
    )
    cover.add_argument("--title", default="", help="Job title")
    cover.add_argument("--company", default="", help="Company name")
    cover.add_argument("--manager", default="", help="Hiring manager name")
    cover.add_argument("--description", default="", help="Job details")
    cover.add_argument("--address", default="", help="Company address")
    cover.add_argument(
        "--output", type=Path, default=None, help="Write the letter to this file or directory"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for CareerNavigate.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    context: Optional[AppContext] = None
    try:
        # Step 1: Load configuration early (before logging for format detection)
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        # Step 2: Configure logging
        log_format = app_config.logging.format if app_config.logging else "key-value"
        environment = os.environ.get("ENVIRONMENT", "local")
        configure_logging(
            level=env_config.log_level, format_type=log_format, environment=environment
        )

        logger.info(
            "CareerNavigate starting",
            extra={
                "event": "service.starting",
                "command": args.command,
                "log_level": env_config.log_level,
            },
        )

        # Step 3: Initialize database and services
        init_database(env_config.database_url)
        context = build_context(app_config, env_config)

        # Step 4: Run the command
        exit_code = COMMANDS[args.command](args, context)

        logger.info(
            "CareerNavigate finished",
            extra={
                "event": "service.stopping",
                "command": args.command,
                "exit_code": exit_code,
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return exit_code

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except (FeatureError, PersistenceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(
            f"Command failed: {e}",
            extra={
                "event": "service.command.failed",
                "command": args.command,
                "error_type": type(e).__name__,
            },
        )
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1
    finally:
        if context is not None:
            context.close()
        close_database()


if __name__ == "__main__":
    sys.exit(main())
