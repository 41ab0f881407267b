# app/utils/templating.py
import re
from datetime import datetime
from typing import Any, Mapping

PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")


def render_template(template: str, variables: Mapping[str, Any]) -> str:
    """
    Replace `{{key}}` placeholders with values from `variables`.

    Substitution is literal (no HTML escaping). `year` defaults to the
    current year. Placeholders with no value are removed.
    """
    if not template:
        return ""

    values = dict(variables)
    values.setdefault("year", str(datetime.now().year))

    def _substitute(match: re.Match) -> str:
        value = values.get(match.group(1))
        return "" if value is None else str(value)

    return PLACEHOLDER_RE.sub(_substitute, template)


def text_to_html(text: str) -> str:
    """Newlines to <br> and **bold** to <strong>, as the invitation editor emits."""
    html = text.replace("\n", "<br>")
    return re.sub(r"\*\*(.*?)\*\*", r"<strong>\1</strong>", html)
