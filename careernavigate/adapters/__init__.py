"""Adapters for the external APIs CareerNavigate talks to.

- Chat completion (OpenAI-compatible): chat.ChatCompletionAdapter
- Google Jobs via SerpApi: jobs.SerpApiJobsAdapter

Use the factory functions to build them from configuration:
    from careernavigate.adapters import build_chat_adapter
    adapter = build_chat_adapter(app_config, env_config)
    reply = adapter.chat("Hello")

Exception handling:
    from careernavigate.adapters import AdapterError, AdapterHTTPError, AdapterTimeoutError
"""

from .base import BaseAdapter
from .chat import ChatCompletionAdapter
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)
from .factory import build_chat_adapter, build_jobs_adapter
from .jobs import SerpApiJobsAdapter

__all__ = [
    # Base and factory
    "BaseAdapter",
    "build_chat_adapter",
    "build_jobs_adapter",
    # Adapters
    "ChatCompletionAdapter",
    "SerpApiJobsAdapter",
    # Exceptions
    "AdapterError",
    "AdapterHTTPError",
    "AdapterTimeoutError",
    "AdapterResponseError",
    "AdapterConfigurationError",
]
