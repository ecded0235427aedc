"""Wiki page slugs."""

import re

DEFAULT_SLUG = "pagina"


def slugify_wiki_title(title: str | None) -> str:
    """Lowercase ASCII slug: quotes dropped, other runs of non-alphanumerics -> '-'."""
    base = str(title or "").strip().lower()
    base = re.sub(r"['\"]", "", base)
    base = re.sub(r"[^a-z0-9]+", "-", base)
    base = base.strip("-")
    return base or DEFAULT_SLUG
