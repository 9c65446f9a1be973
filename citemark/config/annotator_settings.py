"""
Centralized settings for the CitationAnnotator.

Usage:
    from citemark.config.annotator_settings import ANNOTATOR_SETTINGS

    if ANNOTATOR_SETTINGS.append_reference_section:
        ...
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class AnnotatorSettings:
    """Behaviour switches for one annotator instance."""

    # Re-append the (unannotated) reference section after the body.
    # The document viewer shows references in a separate panel, so it is off.
    append_reference_section: bool = False

    # Markup template file; None uses citemark/config/templates/markup.yaml
    templates_path: Optional[Path] = None


# Global default instance
ANNOTATOR_SETTINGS = AnnotatorSettings()
