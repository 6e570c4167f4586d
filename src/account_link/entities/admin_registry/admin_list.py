"""Conversion to and from the comma-separated admin list used by host sites."""

from collections.abc import Iterable


def parse_admin_list(text: str | None) -> list[str]:
    """Split a comma-separated admin list into ordered, de-duplicated ids.

    Blank entries and ``0`` (an unset id in the host's config) are dropped.
    """
    if not text:
        return []

    ids: list[str] = []
    for raw in text.split(","):
        account_id = raw.strip()
        if not account_id or account_id == "0":
            continue
        if account_id not in ids:
            ids.append(account_id)
    return ids


def format_admin_list(account_ids: Iterable[str]) -> str:
    seen: list[str] = []
    for account_id in account_ids:
        if account_id not in seen:
            seen.append(account_id)
    return ",".join(seen)
