"""
Markup fragments for classified citations.

Every fragment is a <mark> wrapper carrying semantic classes and a title
tooltip. Clickable units are <span class="citation-link" data-ref="N">,
the attribute the host's click handler routes on. All citation and change
text is HTML-escaped before insertion.
"""
import html as html_lib
import logging
from typing import List, Optional

from citemark.core.annotation.classifier import Classification, ClassificationState
from citemark.core.annotation.click_routing import REF_ATTRIBUTE
from citemark.core.annotation.markup_loader import MarkupTemplateLoader, get_markup_loader
from citemark.core.annotation.range_expander import bracket_numbers
from citemark.core.models.citation import ChangeRecord

logger = logging.getLogger(__name__)


def escape(text: Optional[str]) -> str:
    """Escape HTML special characters."""
    if not text:
        return ""
    return html_lib.escape(str(text))


class FragmentRenderer:
    """Render Classification results as <mark> fragments."""

    def __init__(self, templates: Optional[MarkupTemplateLoader] = None):
        """
        Initialize renderer.

        Args:
            templates: Markup template loader (defaults to the shared instance)
        """
        self.templates = templates or get_markup_loader()

    def render(self, result: Classification) -> str:
        """
        Render the fragment for one classification.

        Args:
            result: Classification from ValidityClassifier

        Returns:
            Markup fragment replacing the citation occurrence
        """
        handlers = {
            ClassificationState.CHANGED: self._render_changed,
            ClassificationState.ORPHANED: self._render_orphaned,
            ClassificationState.UNMATCHED: self._render_unmatched,
            ClassificationState.MATCHED_NUMBER: self._render_matched_number,
            ClassificationState.MATCHED_AUTHOR_YEAR: self._render_author_year,
            ClassificationState.DEFAULT: self._render_default,
        }
        return handlers[result.state](result)

    def render_deleted_change(self, change: ChangeRecord) -> str:
        """
        Render orphan markup for a deletion record with no live citation.

        Args:
            change: ChangeRecord whose is_deletion is True

        Returns:
            Orphan markup fragment
        """
        return self._orphan_mark(change.display_text, self.templates.tooltip("orphaned"))

    def _render_changed(self, result: Classification) -> str:
        change = result.change
        t = self.templates
        track = t.get_track_class(change.change_type.value) or t.get_track_class("style")
        old_display = f'<span class="{t.get_track_class("old_text")}">{escape(change.old_text)}</span>'
        arrow = f'<span class="{t.get_track_class("arrow")}">{escape(t.get_arrow())}</span>'
        new_display = self.render_numbers(change.new_text, t.get_track_class("style"))
        title = t.tooltip("changed", old=change.old_text, new=change.new_text)
        return self._mark(result.state, title, old_display + arrow + new_display, track, t.get_class("pulse"))

    def _render_orphaned(self, result: Classification) -> str:
        change = result.change
        if change is not None and change.old_number is not None:
            title = self.templates.tooltip("orphaned_change", number=change.old_number)
        elif result.deleted_numbers:
            numbers = ", #".join(str(n) for n in result.deleted_numbers)
            title = self.templates.tooltip("orphaned_numbers", numbers=numbers)
        else:
            title = self.templates.tooltip("orphaned")
        return self._orphan_mark(result.search_text, title)

    def _render_unmatched(self, result: Classification) -> str:
        content = f"{escape(result.citation.raw_text)} {self._glyph()}"
        return self._mark(result.state, self.templates.tooltip("unmatched"), content)

    def _render_matched_number(self, result: Classification) -> str:
        t = self.templates
        citation = result.citation
        change = result.change
        extra = []
        link_extra = ""

        if (
            change is not None
            and change.new_number is not None
            and change.old_number is not None
            and change.old_number != change.new_number
        ):
            title = t.tooltip("renumbered", old=change.old_number, new=change.new_number)
            link_extra = t.get_track_class("renumber")
            extra = [link_extra, t.get_class("pulse")]
        elif citation.reference_number is not None:
            title = t.tooltip("reference", number=citation.reference_number)
        else:
            title = t.tooltip("references", numbers=", ".join(str(n) for n in result.valid_numbers))

        content = self.render_numbers(citation.raw_text, link_extra)
        if not bracket_numbers(citation.raw_text) and citation.reference_number is not None:
            content = self._link(citation.reference_number, content, link_extra)
        return self._mark(result.state, title, content, *extra)

    def _render_author_year(self, result: Classification) -> str:
        raw = result.citation.raw_text
        matches = result.author_year_matches
        parts: List[str] = []
        cursor = 0
        for match in matches:
            start = raw.find(match.matched_span, cursor)
            if start < 0:
                continue
            parts.append(escape(raw[cursor:start]))
            parts.append(self._link(match.ref_number, escape(match.matched_span)))
            cursor = start + len(match.matched_span)
        parts.append(escape(raw[cursor:]))

        numbers = ", ".join(f"#{m.ref_number}" for m in matches)
        title = self.templates.tooltip("references", numbers=numbers)
        return self._mark(result.state, title, "".join(parts))

    def _render_default(self, result: Classification) -> str:
        citation = result.citation
        if citation.reference_number is not None:
            title = self.templates.tooltip("reference", number=citation.reference_number)
        else:
            title = self.templates.tooltip("citation")
        return self._mark(result.state, title, self.render_numbers(citation.raw_text))

    def render_numbers(self, text: Optional[str], link_class: str = "") -> str:
        """
        Render bracketed numeric text with each number clickable.

        "[3-5]" -> "[<span ...>3</span>, <span ...>4</span>, <span ...>5</span>]".
        Any other shape is returned escaped.

        Args:
            text: Citation text
            link_class: Extra class added to every link

        Returns:
            Markup string
        """
        numbers = bracket_numbers(text or "")
        if not numbers:
            return escape(text)
        links = ", ".join(self._link(n, str(n), link_class) for n in numbers)
        return f"[{links}]"

    def _link(self, number: int, content: str, extra_class: str = "") -> str:
        classes = " ".join(c for c in (self.templates.get_class("link"), extra_class) if c)
        return f'<span class="{classes}" {REF_ATTRIBUTE}="{number}">{content}</span>'

    def _glyph(self) -> str:
        glyph_class = self.templates.get_class("warning_glyph")
        return f'<span class="{glyph_class}">{escape(self.templates.get_glyph())}</span>'

    def _orphan_mark(self, text: str, title: str) -> str:
        t = self.templates
        content = f'<span class="{t.get_track_class("deleted")}">{escape(text)}</span> {self._glyph()}'
        return self._mark(
            ClassificationState.ORPHANED, title, content,
            t.get_track_class("deleted"), t.get_class("pulse"),
        )

    def _mark(self, state: ClassificationState, title: str, content: str, *extra: str) -> str:
        classes = [self.templates.get_class("mark"), self.templates.get_state_class(state.value)]
        classes.extend(extra)
        class_attr = " ".join(c for c in classes if c)
        return f'<mark class="{class_attr}" title="{escape(title)}">{content}</mark>'
