# backend/consultation_portal/services/template_service.py
"""
Template rendering service for the consultation portal.

Provides centralized template rendering using Jinja2 for the
notification emails, with common context variables merged in.
"""

from datetime import datetime
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from ..core.config import settings
from ..core.constants import BRAND_NAME
from .base import BaseService

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class TemplateService(BaseService):
    """
    Centralized template rendering service using Jinja2.

    Rendering needs no database session, so the service is built without one.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        super().__init__(None)

        template_dir = template_dir or TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=True,  # Enable autoescaping for security
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._register_custom_filters()

        self.logger.info(f"Template service initialized with template directory: {template_dir}")

    def _register_custom_filters(self) -> None:
        """Register custom Jinja2 filters."""

        def format_datetime(value: Any, format_str: str = "%B %d, %Y at %I:%M %p") -> str:
            """Format a datetime object."""
            if value is None:
                return ""
            if isinstance(value, str):
                return value  # Already formatted
            return value.strftime(format_str)

        self.env.filters["format_datetime"] = format_datetime

    def get_common_context(self) -> Dict[str, Any]:
        """Common context variables used across all templates."""
        return {
            "brand_name": BRAND_NAME,
            "current_year": datetime.now().year,
            "frontend_url": settings.frontend_url,
        }

    @BaseService.measure_operation("render_template")
    def render_template(
        self, template_name: str, context: Optional[Dict[str, Any]] = None, **kwargs: Any
    ) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Path to template relative to templates directory
            context: Dictionary of template variables
            **kwargs: Additional template variables

        Raises:
            TemplateNotFound: If template doesn't exist
        """
        try:
            template = self.env.get_template(template_name)

            full_context = self.get_common_context()
            if context:
                full_context.update(context)
            full_context.update(kwargs)

            rendered = template.render(full_context)
            self.logger.debug(f"Successfully rendered template: {template_name}")
            return rendered
        except TemplateNotFound:
            self.logger.error(f"Template not found: {template_name}")
            raise

    def template_exists(self, template_name: str) -> bool:
        try:
            self.env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False
