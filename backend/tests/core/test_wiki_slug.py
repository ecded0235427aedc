"""Wiki Slug — URL-safe page slugs."""

import pytest

from app.core.wiki_slug import slugify_wiki_title


@pytest.mark.parametrize("title,slug", [
    ("Guida Onboarding", "guida-onboarding"),
    ("  Procedure  HR / 2025 ", "procedure-hr-2025"),
    ("Guida all'Onboarding!", "guida-allonboarding"),
    ('Il "nuovo" processo', "il-nuovo-processo"),
    ("---FAQ---", "faq"),
])
def test_slugify_wiki_title(title, slug):
    assert slugify_wiki_title(title) == slug


@pytest.mark.parametrize("title", ["", "   ", None, "!!!"])
def test_empty_slug_falls_back(title):
    assert slugify_wiki_title(title) == "pagina"
