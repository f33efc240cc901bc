import re
import unicodedata

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[-\s_]+")


def slugify(value: str) -> str:
    """Lowercase, ASCII-only, hyphen-separated slug ("The Rock!" -> "the-rock")."""
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = _NON_WORD.sub("", value).strip().lower()
    return _SEPARATORS.sub("-", value).strip("-")
