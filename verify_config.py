#!/usr/bin/env python3
"""Simple script to verify config.example.yaml structure without loading the app."""

import yaml
from pathlib import Path


KNOWN_SECTIONS = {
    'ai': ['base_url', 'chat_model', 'light_model', 'temperature',
           'resume_context_chars', 'keyword_context_chars'],
    'job_search': ['endpoint', 'engine', 'location', 'google_domain', 'hl', 'gl',
                   'max_results', 'internship_suffix'],
    'storage': ['blob_dir'],
    'logging': ['level', 'format'],
    'advanced': ['http_request_timeout', 'user_agent'],
}


def verify_config_structure(config_file=Path("config.example.yaml")):
    """Verify config.example.yaml has the expected structure."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        print(f"✗ Failed to parse {config_file}: {e}")
        return False

    if not isinstance(config, dict):
        print(f"✗ {config_file} must contain a mapping")
        return False

    errors = []

    for key, value in config.items():
        if key not in KNOWN_SECTIONS:
            errors.append(f"Unknown section: {key}")
            continue
        if not isinstance(value, dict):
            errors.append(f"'{key}' must be a dictionary")
            continue
        for field in value:
            if field not in KNOWN_SECTIONS[key]:
                errors.append(f"Unknown field: {key}.{field}")

    # Secrets belong in the environment
    for section in config.values():
        if isinstance(section, dict):
            for field in section:
                if 'api_key' in field:
                    errors.append(f"API keys must not be stored in the config file: {field}")

    ai = config.get('ai', {})
    if isinstance(ai, dict) and 'base_url' in ai:
        if not str(ai['base_url']).startswith(('http://', 'https://')):
            errors.append("ai.base_url must start with http:// or https://")

    logging_section = config.get('logging', {})
    if isinstance(logging_section, dict) and 'format' in logging_section:
        if logging_section['format'] not in ('json', 'key-value'):
            errors.append("logging.format must be 'json' or 'key-value'")

    if errors:
        print(f"✗ {config_file} validation failed:")
        for error in errors:
            print(f"  - {error}")
        return False
    else:
        print(f"✓ {config_file} structure is valid")
        print(f"  - Chat model: {ai.get('chat_model', 'default')}")
        print(f"  - Light model: {ai.get('light_model', 'default')}")
        job_search = config.get('job_search', {})
        print(f"  - Job search location: {job_search.get('location', 'default')}")
        return True


if __name__ == "__main__":
    import sys
    success = verify_config_structure()
    sys.exit(0 if success else 1)
