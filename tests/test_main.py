"""Unit tests for the main entry point.

Tests the main() function including:
- CLI argument parsing
- Configuration loading with priority (CLI > env > config)
- Database initialization and cleanup
- Command dispatch
- Exit code handling
- Interactive chat loop
"""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from careernavigate.config.environment import EnvironmentConfig
from careernavigate.config.exceptions import ConfigurationError
from careernavigate.config.models import AppConfig, LoggingConfig
from careernavigate.domain.models import NO_RESUMES_MESSAGE, ResumeRecord
from careernavigate.features.conversation import Conversation
from careernavigate.features.pathfinder import create_pathfinder
from careernavigate.main import (
    build_parser,
    chat_loop,
    load_runtime_config,
    main,
    run_analyze,
    run_cover_letter,
    run_history,
    run_skills,
)
from careernavigate.prompts import PromptRenderer
from tests.helpers import ScriptedChatAdapter


def make_env_config(log_level=None):
    return EnvironmentConfig(
        ai_api_key="test-key", database_url="sqlite:///:memory:", log_level=log_level
    )


@pytest.fixture
def mock_runtime():
    """Patch configuration, logging, database and context construction."""
    context = MagicMock()
    with patch("careernavigate.main.load_runtime_config") as mock_load, patch(
        "careernavigate.main.configure_logging"
    ) as mock_logging, patch("careernavigate.main.init_database") as mock_init, patch(
        "careernavigate.main.close_database"
    ) as mock_close, patch(
        "careernavigate.main.build_context", return_value=context
    ) as mock_build:
        mock_load.return_value = (AppConfig(), make_env_config("INFO"))
        yield {
            "load": mock_load,
            "logging": mock_logging,
            "init": mock_init,
            "close": mock_close,
            "build": mock_build,
            "context": context,
        }


# ============================================================================
# Runtime Configuration Tests
# ============================================================================


class TestLoadRuntimeConfig:
    """Test suite for load_runtime_config helper."""

    def test_log_level_priority(self):
        """Test log level priority: CLI > env > config."""
        app_config = AppConfig(logging=LoggingConfig(level="WARNING"))

        with patch("careernavigate.main.load_config") as mock_load:
            # CLI wins over env and config
            mock_load.return_value = (app_config, make_env_config("DEBUG"))
            _, env_config = load_runtime_config(None, "ERROR")
            assert env_config.log_level == "ERROR"

            # Env wins over config
            mock_load.return_value = (app_config, make_env_config("DEBUG"))
            _, env_config = load_runtime_config(None, None)
            assert env_config.log_level == "DEBUG"

            # Config used when neither is set
            mock_load.return_value = (app_config, make_env_config(None))
            _, env_config = load_runtime_config(None, None)
            assert env_config.log_level == "WARNING"

    def test_config_path_passed_through(self, tmp_path):
        """Test the --config path reaches the loader."""
        config_file = tmp_path / "config.yaml"

        with patch("careernavigate.main.load_config") as mock_load:
            mock_load.return_value = (AppConfig(), make_env_config())
            load_runtime_config(config_file, None)

        mock_load.assert_called_once_with(config_file)


# ============================================================================
# Argument Parsing Tests
# ============================================================================


class TestBuildParser:
    """Tests for CLI argument parsing."""

    def test_command_required(self):
        """Test a subcommand must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_jobs_defaults_to_job_mode(self):
        """Test the jobs command searches jobs unless told otherwise."""
        args = build_parser().parse_args(["jobs", "r1"])

        assert args.mode == "job"
        assert args.resume_id == "r1"

    def test_invalid_job_mode(self):
        """Test only known modes are accepted."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["jobs", "r1", "--mode", "contract"])

    def test_linkedin_target_required(self):
        """Test linkedin needs either a resume id or a company."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["linkedin"])

        with pytest.raises(SystemExit):
            build_parser().parse_args(["linkedin", "--resume-id", "r1", "--company", "Acme"])

    def test_global_options(self):
        """Test --config and --log-level come before the command."""
        args = build_parser().parse_args(["--log-level", "DEBUG", "history"])

        assert args.log_level == "DEBUG"
        assert args.command == "history"
        assert args.config is None


# ============================================================================
# main() Tests
# ============================================================================


class TestMain:
    """Test suite for main() function."""

    def test_history_without_records(self, mock_runtime, capsys):
        """Test an empty history prints the empty-state message."""
        mock_runtime["context"].analyzer.return_value.list_records.return_value = []

        exit_code = main(["history"])

        assert exit_code == 0
        assert NO_RESUMES_MESSAGE in capsys.readouterr().out
        mock_runtime["init"].assert_called_once_with("sqlite:///:memory:")
        mock_runtime["context"].close.assert_called_once()
        mock_runtime["close"].assert_called_once()

    def test_logging_configured_from_config(self, mock_runtime):
        """Test logging uses the resolved level and configured format."""
        mock_runtime["load"].return_value = (
            AppConfig(logging=LoggingConfig(format="json")),
            make_env_config("DEBUG"),
        )
        mock_runtime["context"].analyzer.return_value.list_records.return_value = []

        main(["history"])

        kwargs = mock_runtime["logging"].call_args.kwargs
        assert kwargs["level"] == "DEBUG"
        assert kwargs["format_type"] == "json"

    def test_configuration_error(self, mock_runtime, capsys):
        """Test configuration errors exit with 1 before touching the database."""
        mock_runtime["load"].side_effect = ConfigurationError("Missing AI_API_KEY")

        exit_code = main(["history"])

        assert exit_code == 1
        assert "Configuration Error" in capsys.readouterr().err
        mock_runtime["init"].assert_not_called()
        mock_runtime["close"].assert_called_once()

    def test_resume_not_found(self, mock_runtime, capsys):
        """Test an unknown resume id is reported with exit code 1."""
        mock_runtime["context"].analyzer.return_value.load.return_value = None

        exit_code = main(["jobs", "missing-id"])

        assert exit_code == 1
        assert "Resume not found: missing-id" in capsys.readouterr().err

    def test_keyboard_interrupt(self, mock_runtime):
        """Test Ctrl+C exits cleanly."""
        mock_runtime["build"].side_effect = KeyboardInterrupt()

        assert main(["pathfinder"]) == 0
        mock_runtime["close"].assert_called_once()

    def test_unexpected_error(self, mock_runtime, capsys):
        """Test unexpected errors exit with 1 and still release resources."""
        mock_runtime["context"].analyzer.return_value.list_records.side_effect = RuntimeError(
            "boom"
        )

        exit_code = main(["history"])

        assert exit_code == 1
        assert "Fatal error: boom" in capsys.readouterr().err
        mock_runtime["context"].close.assert_called_once()
        mock_runtime["close"].assert_called_once()


# ============================================================================
# Command Tests
# ============================================================================


def make_record(feedback):
    return ResumeRecord(
        id="r1",
        resume_path="r1/resume.pdf",
        company_name="Acme",
        job_title="Backend Developer",
        feedback=feedback,
        created_at=datetime(2025, 11, 4, tzinfo=timezone.utc),
    )


class TestCommands:
    """Tests for individual command handlers."""

    def test_history_lists_records(self, capsys):
        """Test each record is listed with its score."""
        context = MagicMock()
        context.analyzer.return_value.list_records.return_value = [
            make_record({"overallScore": 81, "ATS": {"score": 74.5, "tips": []}}),
            make_record(None),
        ]

        assert run_history(build_parser().parse_args(["history"]), context) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "r1  Acme  Backend Developer  Score: 81  ATS: 74.5"
        assert lines[1].endswith("Score: 0  ATS: 0")

    def test_analyze_prints_score_and_ats_tips(self, tmp_path, capsys):
        """Test the analysis summary includes the ATS score and each tip."""
        resume = tmp_path / "resume.pdf"
        resume.write_bytes(b"%PDF-1.4")
        text_file = tmp_path / "resume.txt"
        text_file.write_text("Jane Doe. Python.")
        context = MagicMock()
        context.analyzer.return_value.analyze.return_value = make_record(
            {
                "overallScore": 72,
                "job_title": "Backend Developer",
                "ATS": {
                    "score": 65,
                    "tips": [
                        {"type": "good", "tip": "Clear headings"},
                        {"type": "improve", "tip": "Add keywords"},
                    ],
                },
            }
        )
        args = build_parser().parse_args(
            ["analyze", "--resume", str(resume), "--text-file", str(text_file)]
        )

        assert run_analyze(args, context) == 0

        output = capsys.readouterr().out
        assert "Score: 72" in output
        assert "ATS Score: 65" in output
        assert "  + Clear headings" in output
        assert "  - Add keywords" in output
        kwargs = context.analyzer.return_value.analyze.call_args.kwargs
        assert kwargs["resume_text"] == "Jane Doe. Python."
        assert kwargs["resume_file"].filename == "resume.pdf"

    def test_skills(self, capsys):
        """Test the skill gap lists learning links for missing skills."""
        context = MagicMock()
        context.analyzer.return_value.load.return_value = make_record(
            {"skill_gap": {"found_skills": ["Python"], "missing_skills": ["C++"]}}
        )

        run_skills(build_parser().parse_args(["skills", "r1"]), context)

        output = capsys.readouterr().out
        assert "  Python" in output
        assert "https://www.coursera.org/search?query=C%2B%2B" in output

    def test_cover_letter_written_to_directory(self, tmp_path, capsys):
        """Test the letter is saved under the document title."""
        resume_json = tmp_path / "resume.json"
        resume_json.write_text(
            json.dumps({"personal": {"full_name": "Jane Doe", "email": "jane@example.com"}})
        )
        context = MagicMock()
        context.renderer = PromptRenderer()
        context.chat_adapter = ScriptedChatAdapter(['"I would love to join Acme."'])
        args = build_parser().parse_args(
            [
                "cover-letter",
                "--resume-json",
                str(resume_json),
                "--title",
                "Backend Developer",
                "--company",
                "Acme",
                "--output",
                str(tmp_path),
            ]
        )

        assert run_cover_letter(args, context) == 0

        letter = (tmp_path / "Jane_Doe_Cover_Letter.txt").read_text()
        assert "I would love to join Acme." in letter
        assert "Dear Hiring Manager," in letter
        assert "Cover letter written to" in capsys.readouterr().out


# ============================================================================
# Chat Loop Tests
# ============================================================================


def scripted_input(lines):
    """read() stub that returns each line, then raises EOFError."""
    remaining = list(lines)

    def read(prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read


class TestChatLoop:
    """Tests for the interactive chat loop."""

    def test_greeting_reply_and_exit(self):
        """Test the greeting is shown and the loop stops on 'exit'."""
        adapter = ScriptedChatAdapter(["Happy to help."])
        conversation = Conversation(adapter, system_prompt="s", greeting="Hello!", fallback_text="f")
        output = []

        exit_code = chat_loop(conversation, read=scripted_input(["Hi", "exit", "ignored"]), write=output.append)

        assert exit_code == 0
        assert output == ["Hello!", "\nHappy to help."]
        assert len(adapter.calls) == 1

    def test_blank_lines_skipped_until_eof(self):
        """Test blank input is ignored and EOF ends the loop."""
        adapter = ScriptedChatAdapter([])
        conversation = Conversation(adapter, system_prompt="s", greeting="Hello!", fallback_text="f")

        assert chat_loop(conversation, read=scripted_input(["", "   "]), write=lambda _: None) == 0
        assert adapter.calls == []

    def test_roadmap_steps_printed(self):
        """Test roadmap replies print each step with its resources link."""
        reply = (
            "Try frontend.\n"
            ':::ROADMAP [{"month": "Month 1", "title": "Basics", "topics": ["HTML"], '
            '"resourceQuery": "html course", "projectIdea": "Bio page"}] :::'
        )
        pathfinder = create_pathfinder(ScriptedChatAdapter([reply]), PromptRenderer())
        output = []

        chat_loop(pathfinder, read=scripted_input(["I like design"]), write=output.append)

        assert "\nTry frontend." in output
        assert "\nMonth 1: Basics" in output
        assert "  - HTML" in output
        assert "  Project: Bio page" in output
        assert any(line.startswith("  Resources: ") and "html" in line for line in output)
