"""Header set reconciliation across ingested files."""
from __future__ import annotations

from typing import List, Sequence


def reconcile(reference: Sequence[str], candidate: Sequence[str]) -> bool:
    """
    Check whether `candidate` headers match the `reference` headers.

    An empty reference accepts anything. Otherwise both must have the same
    number of names and every reference name must appear in the candidate.
    Order does not matter; names are compared case-sensitively.
    """
    if len(reference) == 0:
        return True
    if len(candidate) != len(reference):
        return False
    return all(header in candidate for header in reference)


class HeaderSchema:
    """
    Reference header set for one ingestion batch.

    The schema is either EMPTY or ESTABLISHED. The first non-empty header
    row admitted while EMPTY becomes the reference; `reset` is the only way
    back to EMPTY.
    """

    def __init__(self) -> None:
        self._reference: List[str] = []

    @property
    def headers(self) -> List[str]:
        return list(self._reference)

    @property
    def is_established(self) -> bool:
        return bool(self._reference)

    def admit(self, candidate: Sequence[str]) -> bool:
        """Accept or reject `candidate`, establishing it as reference when EMPTY."""
        if not self.is_established:
            self._reference = list(candidate)
            return True
        return reconcile(self._reference, candidate)

    def reset(self) -> None:
        self._reference = []

    def __repr__(self) -> str:
        state = "ESTABLISHED" if self.is_established else "EMPTY"
        return f"HeaderSchema({state}, headers={self._reference!r})"
