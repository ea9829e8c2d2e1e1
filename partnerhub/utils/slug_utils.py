# partnerhub/utils/slug_utils.py
from typing import Callable, Optional

from slugify import slugify

# Cabe nas colunas slug (160+) com sufixo de dono e de colisão
SLUG_MAX_LENGTH = 140

_REPLACEMENTS = [
    ("&", " and "),
    ("%", " percent "),
    ("đ", "d"), ("Đ", "d"),
]


def make_slug(text: Optional[str]) -> str:
    """'Phở Thìn Lò Đúc' -> 'pho-thin-lo-duc'"""
    if not text:
        return ""
    return slugify(
        text,
        max_length=SLUG_MAX_LENGTH,
        word_boundary=True,
        replacements=_REPLACEMENTS,
    )


def make_owned_slug(text: Optional[str], owner_id: int | str, fallback: str = "item") -> str:
    """Slug com sufixo do dono, garantindo unicidade entre parceiros."""
    return f"{make_slug(text) or fallback}-{owner_id}"


def unique_slug(base: str, exists: Callable[[str], bool]) -> str:
    """Primeiro de base, base-2, base-3... que ainda não existe."""
    slug, n = base, 2
    while exists(slug):
        slug = f"{base}-{n}"
        n += 1
    return slug
