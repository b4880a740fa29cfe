"""Child tag and pickup tag rendering."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
from zoneinfo import ZoneInfo

from jinja2 import Environment, PackageLoader, select_autoescape

from ..core.config import settings
from ..core.utils import strftime, to_timezone, utcnow
from ..domain import PrintLabel

PICKUP_HEADING = "PARENT PICKUP TAG"
PICKUP_FOOTER = "Present this tag for pickup"
ALLERGY_PREFIX = "!! ALLERGIES: "

_env = Environment(
    loader=PackageLoader("sanctuary", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True)
class LabelPair:
    """Plain-text lines for the two tags of one check-in."""

    child: List[str]
    pickup: List[str]


class LabelFormatter:
    """Renders a PrintLabel as matching child and pickup tags.

    Stateless apart from the display timezone.
    """

    def __init__(self, tz: Optional[ZoneInfo] = None):
        self._tz = tz or settings.tz

    def render(self, label: PrintLabel) -> LabelPair:
        printed = self._printed_at(label)
        allergy_lines = [ALLERGY_PREFIX + ", ".join(label.allergies)] if label.allergies else []

        child = [label.child_name, label.session_name, label.code, *allergy_lines, strftime(printed)]
        pickup = [
            PICKUP_HEADING,
            label.child_name,
            label.session_name,
            label.code,
            *allergy_lines,
            PICKUP_FOOTER,
        ]
        return LabelPair(child=child, pickup=pickup)

    def render_html(self, label: PrintLabel) -> str:
        """The print document opened in a new window and sent to the printer."""
        printed = self._printed_at(label)
        template = _env.get_template("labels.html")
        return template.render(
            label=label,
            printed_at_long=strftime(printed),
            printed_at_short=strftime(printed, "%b %d, %Y"),
        )

    def _printed_at(self, label: PrintLabel):
        return to_timezone(label.printed_at or utcnow(), self._tz)
