"""
Jinja2 rendering of generated TypeScript and project scaffold files.
"""

import logging
from pathlib import Path

import jinja2

from .rewriter import stub_body
from ..languages.utils import ts_string

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Render the package's templates."""

    def __init__(self, template_dir: Path = None):
        """
        Initialize the renderer.

        Args:
            template_dir: Directory with override templates, searched before
                the templates shipped with the package
        """
        loaders = [jinja2.PackageLoader("selenium2playwright", "templates")]
        if template_dir:
            loaders.insert(0, jinja2.FileSystemLoader(str(template_dir)))

        self.env = jinja2.Environment(
            loader=jinja2.ChoiceLoader(loaders),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self.env.globals["stub"] = stub_body
        self.env.filters["ts_string"] = ts_string

    def render_template(self, template_name: str, **context) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of the template file
            **context: Template variables

        Returns:
            Rendered template as string
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except jinja2.TemplateNotFound:
            logger.error(f"Template not found: {template_name}")
            raise
        except Exception as e:
            logger.error(f"Template rendering failed for {template_name}: {e}")
            raise
