from __future__ import annotations

from typing import AbstractSet, Sequence

from ..common.validators import normalize_email
from .model import Reconciliation


def reconcile(roster_emails: Sequence[str], present_set: AbstractSet[str]) -> Reconciliation:
    """Stable partition of ``roster_emails`` into present and absent.

    ``present_set`` must already be normalized. Every input position lands in
    exactly one output list, duplicates included, in input order.
    """
    present: list[str] = []
    absent: list[str] = []
    for email in roster_emails:
        normalized = normalize_email(email)
        (present if normalized in present_set else absent).append(normalized)
    return Reconciliation(present=present, absent=absent)
