"""Advisory checks on raw configuration that do not block startup."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that work but are probably unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    ai = config_dict.get("ai", {})
    if isinstance(ai, dict):
        base_url = ai.get("base_url")
        if isinstance(base_url, str) and base_url.strip().startswith("http://"):
            if not any(host in base_url for host in ("localhost", "127.0.0.1")):
                warning_messages.append(
                    f"ai.base_url ({base_url}) is not HTTPS; the API key would be sent in clear text"
                )

        temperature = ai.get("temperature")
        if isinstance(temperature, (int, float)) and temperature > 1.2:
            warning_messages.append(
                f"High ai.temperature ({temperature}) makes structured JSON replies unreliable"
            )

    job_search = config_dict.get("job_search", {})
    if isinstance(job_search, dict):
        max_results = job_search.get("max_results")
        # Google Jobs pages hold 10 results; more are never returned by one search
        if isinstance(max_results, int) and max_results > 10:
            warning_messages.append(
                f"job_search.max_results ({max_results}) exceeds one results page (10)"
            )

    advanced = config_dict.get("advanced", {})
    if isinstance(advanced, dict):
        timeout = advanced.get("http_request_timeout")
        if isinstance(timeout, int) and timeout < 30:
            warning_messages.append(
                f"Short http_request_timeout ({timeout}s) may cut off long AI completions"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message as a UserWarning."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
