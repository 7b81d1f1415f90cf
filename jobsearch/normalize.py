from typing import Any


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


REMOTE_SYNS = {"remote", "fully remote", "remote only", "work from home", "wfh"}
HYBRID_SYNS = {"hybrid", "flexible", "part-remote", "partly remote"}
ONSITE_SYNS = {"onsite", "on-site", "on site", "in office", "in-office", "office"}


def normalize_work_type(work_type: str) -> str:
    wt = normalize_text(work_type)
    if wt in REMOTE_SYNS:
        return "remote"
    if wt in HYBRID_SYNS:
        return "hybrid"
    if wt in ONSITE_SYNS:
        return "onsite"
    return wt


def sort_key(value: Any) -> str:
    """Lower-cased string form used for sorting. Missing values sort as ''."""
    if value is None or value == "":
        return ""
    return str(value).lower()


def contains_ci(haystack: Any, needle: str) -> bool:
    """Case-insensitive substring test. A missing haystack never matches."""
    if not haystack:
        return False
    return needle.lower() in str(haystack).lower()
