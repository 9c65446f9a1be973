"""
MarkupTemplateLoader - Single source of truth for citation markup.

Loads config/templates/markup.yaml which contains:
- Semantic CSS classes per classification state
- Track-change classes per change type
- Tooltip templates (str.format placeholders)
- Warning glyph and transition arrow
"""
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from citemark.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("classes", "tooltips")


class MarkupTemplateLoader:
    """Load citation markup templates from config/templates/."""

    _instance: Optional["MarkupTemplateLoader"] = None

    def __init__(self, templates_path: Optional[Path] = None):
        """Initialize loader.

        Args:
            templates_path: Path to the markup YAML file.
                           Defaults to citemark/config/templates/markup.yaml
        """
        if templates_path is None:
            templates_path = Path(__file__).parents[2] / "config" / "templates" / "markup.yaml"
        self._templates_path = Path(templates_path)
        self._templates: Optional[Dict[str, Any]] = None

    @classmethod
    def get_instance(cls) -> "MarkupTemplateLoader":
        """Get singleton instance for shared access."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton (for testing)."""
        cls._instance = None

    def _load_yaml(self) -> Dict[str, Any]:
        """Load and validate the markup YAML file."""
        path = self._templates_path
        if not path.exists():
            raise ConfigurationError(f"Markup template not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid markup template {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Markup template {path} must be a mapping")
        for section in REQUIRED_SECTIONS:
            if not isinstance(data.get(section), dict):
                raise ConfigurationError(f"Markup template {path} is missing '{section}'")

        logger.debug(f"Loaded markup templates from {path}")
        return data

    def get_templates(self) -> Dict[str, Any]:
        """Load (once) and return the whole template mapping."""
        if self._templates is None:
            self._templates = self._load_yaml()
        return self._templates

    def get_class(self, name: str) -> str:
        """Get a top-level class name (mark, link, pulse, warning_glyph)."""
        return self.get_templates()["classes"].get(name, "")

    def get_state_class(self, state: str) -> str:
        """Get the class for a classification state value."""
        return self.get_templates()["classes"].get("states", {}).get(state, "")

    def get_track_class(self, key: Optional[str]) -> str:
        """Get a track-change class by change type or element key."""
        if not key:
            return ""
        return self.get_templates()["classes"].get("track_changes", {}).get(key, "")

    def tooltip(self, key: str, **values: Any) -> str:
        """Format a tooltip template.

        Args:
            key: Tooltip key (e.g., 'changed', 'references')
            **values: Placeholder values

        Returns:
            Formatted tooltip text (unescaped)
        """
        template = self.get_templates()["tooltips"].get(key, "")
        return template.format(**values)

    def get_glyph(self) -> str:
        """Warning glyph appended to orphaned and unmatched citations."""
        return self.get_templates().get("glyph", "⚠")

    def get_arrow(self) -> str:
        """Arrow text shown between old and new citation text."""
        return self.get_templates().get("arrow", " → ")

    def clear_cache(self) -> None:
        """Clear the loaded templates."""
        self._templates = None


# Convenience function for simple access
def get_markup_loader() -> MarkupTemplateLoader:
    """Get the singleton MarkupTemplateLoader instance."""
    return MarkupTemplateLoader.get_instance()
