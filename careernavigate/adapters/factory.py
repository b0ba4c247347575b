"""Factory functions for instantiating the outbound API adapters."""

from careernavigate.config.environment import EnvironmentConfig
from careernavigate.config.models import AppConfig
from careernavigate.logging import get_logger

from .chat import ChatCompletionAdapter
from .exceptions import AdapterConfigurationError
from .jobs import SerpApiJobsAdapter

logger = get_logger(__name__, component="adapter")


def build_chat_adapter(
    app_config: AppConfig, env_config: EnvironmentConfig, light: bool = False
) -> ChatCompletionAdapter:
    """Create the chat completion adapter.

    Args:
        app_config: Application configuration (model names, timeout, user-agent)
        env_config: Environment configuration with the API key
        light: Use the light model as the default (short generation tasks)

    Returns:
        Configured ChatCompletionAdapter

    Raises:
        AdapterConfigurationError: If the adapter cannot be built from the config

    Example:
        >>> app_config, env_config = load_config()
        >>> adapter = build_chat_adapter(app_config, env_config)
        >>> reply = adapter.chat("Hello")
    """
    ai = app_config.ai
    model = ai.light_model if light else ai.chat_model

    logger.debug(
        "Creating chat adapter",
        extra={"event": "adapter.chat.created", "base_url": ai.base_url, "model": model},
    )

    try:
        return ChatCompletionAdapter(
            api_key=env_config.ai_api_key,
            base_url=ai.base_url,
            default_model=model,
            temperature=ai.temperature,
            timeout=app_config.advanced.http_request_timeout,
            user_agent=app_config.advanced.user_agent,
        )
    except AdapterConfigurationError:
        raise
    except Exception as e:
        raise AdapterConfigurationError(f"Failed to create chat adapter: {e}") from e


def build_jobs_adapter(app_config: AppConfig, env_config: EnvironmentConfig) -> SerpApiJobsAdapter:
    """Create the job search adapter.

    A missing SERPAPI_API_KEY does not fail here: the adapter is built
    unconfigured and searches report the missing key.
    """
    if not env_config.serpapi_api_key:
        logger.warning(
            "SERPAPI_API_KEY is not set; job search is unavailable",
            extra={"event": "adapter.jobs.unconfigured"},
        )

    return SerpApiJobsAdapter(
        api_key=env_config.serpapi_api_key,
        search_config=app_config.job_search,
        timeout=app_config.advanced.http_request_timeout,
        user_agent=app_config.advanced.user_agent,
    )
