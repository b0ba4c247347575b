"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class JobMode(str, Enum):
    """Kinds of openings the job search can look for."""

    JOB = "job"
    INTERN = "intern"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class AIConfig(BaseModel):
    """Chat completion service settings."""

    base_url: str = Field(
        "https://api.openai.com/v1",
        description="Base URL of an OpenAI-compatible chat completion API",
    )
    chat_model: str = Field(
        "gpt-4o", min_length=1, description="Model for conversations and resume analysis"
    )
    light_model: str = Field(
        "gpt-4o-mini", min_length=1, description="Model for short generation tasks"
    )
    temperature: Optional[float] = Field(
        None, ge=0.0, le=2.0, description="Sampling temperature (provider default when unset)"
    )
    resume_context_chars: int = Field(
        3000, ge=100, description="Characters of resume feedback embedded in coach prompts"
    )
    keyword_context_chars: int = Field(
        1500, ge=100, description="Characters of resume feedback used for job title extraction"
    )

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        stripped = v.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got: {v}")
        return stripped


class JobSearchConfig(BaseModel):
    """Google Jobs search (SerpApi) parameters."""

    endpoint: str = Field("https://serpapi.com/search", description="Search endpoint URL")
    engine: str = Field("google_jobs", description="SerpApi engine name")
    location: str = Field(
        "India", min_length=1, description="Broad location; covers remote, hybrid and on-site"
    )
    google_domain: str = Field("google.co.in", description="Google domain to query")
    hl: str = Field("en", description="Interface language")
    gl: str = Field("in", description="Country code")
    max_results: int = Field(10, ge=1, le=100, description="Postings returned per search")
    internship_suffix: str = Field(
        " internship", description="Appended to the query in internship mode"
    )


class StorageConfig(BaseModel):
    """Local storage for uploaded resume artifacts."""

    blob_dir: str = Field("./data/blobs", min_length=1, description="Directory for blob storage")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """Advanced runtime settings."""

    http_request_timeout: int = Field(
        90, ge=5, le=300, description="Timeout for outbound API calls (seconds)"
    )
    user_agent: str = Field(
        "CareerNavigate/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for CareerNavigate.

    Every section has defaults, so an empty file (or no file) yields a working
    configuration; secrets live in the environment, not here.
    """

    ai: AIConfig = Field(default_factory=AIConfig, description="Chat completion settings")
    job_search: JobSearchConfig = Field(
        default_factory=JobSearchConfig, description="Job search settings"
    )
    storage: StorageConfig = Field(default_factory=StorageConfig, description="Blob storage")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    advanced: AdvancedConfig = Field(
        default_factory=AdvancedConfig, description="Advanced runtime settings"
    )
