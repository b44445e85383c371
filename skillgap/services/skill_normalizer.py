# skill_normalizer.py
import re


_STRIPPED_CHARS_RE = re.compile(r"[._\-]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_skill_name(value: str | None) -> str:
    """Canonical form of a skill name, used for equality checks only.

    Lowercases, drops periods, hyphens and underscores, collapses runs of
    whitespace and trims. Never stored or displayed.
    """
    if not value:
        return ""
    lowered = _STRIPPED_CHARS_RE.sub("", value.lower())
    return _WHITESPACE_RE.sub(" ", lowered).strip()
