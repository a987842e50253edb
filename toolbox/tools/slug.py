"""URL-safe slugs."""

import re

from beartype import beartype

from toolbox.core.errors import EmptyInputError, EmptyResultError

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


@beartype
def slugify(text: str) -> str:
    """Lower-case ``text`` and collapse every run outside ``[a-z0-9]`` into one ``-``.

    Non-ASCII letters are dropped, not transliterated.
    """
    if not text:
        raise EmptyInputError()

    slug = _NON_SLUG_RUN.sub("-", text.lower()).strip("-")
    if not slug:
        raise EmptyResultError()
    return slug
