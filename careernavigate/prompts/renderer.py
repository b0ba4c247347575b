"""Prompt rendering using Jinja2.

Wraps Jinja2 with strict undefined checking so a prompt never goes out with
a silently empty placeholder.
"""

import logging
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

logger = logging.getLogger(__name__)


class PromptTemplateError(Exception):
    """Raised when a prompt template is missing or fails to render."""

    pass


class PromptRenderer:
    """Renders prompt and letter templates.

    Templates are plain text, so autoescaping is off. Templates are cached by
    the Jinja2 environment for reuse across calls.
    """

    def __init__(self, package: str = "careernavigate.prompts", template_dir: str = "templates"):
        """Initialize renderer with a Jinja2 environment.

        Args:
            package: Package that holds the template directory
            template_dir: Directory name within the package
        """
        self.env = Environment(
            loader=PackageLoader(package, template_dir),
            autoescape=False,
            undefined=StrictUndefined,  # Raise errors for missing variables
            trim_blocks=True,
            lstrip_blocks=True,
        )

        logger.debug(f"Initialized PromptRenderer with templates from {package}/{template_dir}")

    def render(self, template_name: str, **context: Any) -> str:
        """Render one template.

        Args:
            template_name: Template filename, e.g. ``coach_system.j2``
            **context: Template variables

        Returns:
            Rendered text with surrounding whitespace stripped

        Raises:
            PromptTemplateError: If the template is missing or rendering fails
        """
        try:
            template = self.env.get_template(template_name)
            rendered = template.render(**context).strip()
        except TemplateError as e:
            error_msg = f"Template rendering failed for {template_name}: {e}"
            logger.error(error_msg, exc_info=True)
            raise PromptTemplateError(error_msg) from e

        logger.debug(f"Rendered template {template_name} ({len(rendered)} chars)")
        return rendered
