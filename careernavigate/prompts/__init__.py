"""Prompt templates for the AI-backed features.

Templates live in ``careernavigate/prompts/templates`` and are rendered with
Jinja2 (see PromptRenderer).
"""

from .renderer import PromptRenderer, PromptTemplateError

__all__ = ["PromptRenderer", "PromptTemplateError"]
