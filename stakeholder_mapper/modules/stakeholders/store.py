"""In-memory stakeholder record store.

Insertion order is display order. Nothing here validates ``reports_to``:
dangling and self-referencing names are kept as entered and dealt with by
the hierarchy builder.
"""

import math
import re
import uuid

import structlog

from stakeholder_mapper.core.errors import InvalidFieldError
from stakeholder_mapper.modules.stakeholders.schemas import (
    Relationship,
    Stakeholder,
    StakeholderDraft,
)

logger = structlog.get_logger()

_INT_FIELDS = frozenset({"influence", "support", "engagement"})

# Wire name -> attribute name. Both spellings are accepted for updates.
_UPDATABLE_FIELDS: dict[str, str] = {
    "name": "name",
    "title": "title",
    "department": "department",
    "influence": "influence",
    "support": "support",
    "engagement": "engagement",
    "relationship": "relationship",
    "reports_to": "reports_to",
    "reportsTo": "reports_to",
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value) -> int:
    """Parse a score the way a form slider value is read: leading integer, truncated.

    ``"7"`` -> 7, ``"7.9"`` -> 7, ``8.6`` -> 8. Raises ValueError when no
    integer can be read.
    """
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"not an integer: {value!r}")
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    raise ValueError(f"not an integer: {value!r}")


class StakeholderStore:
    """Ordered list of stakeholder records with add / update / remove."""

    def __init__(self) -> None:
        self._records: list[Stakeholder] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[Stakeholder]:
        """Live records in display order (the list itself is a copy)."""
        return list(self._records)

    def get(self, stakeholder_id: uuid.UUID) -> Stakeholder | None:
        for record in self._records:
            if record.id == stakeholder_id:
                return record
        return None

    def add(self, draft: StakeholderDraft) -> Stakeholder | None:
        """Append a new record. Returns None (and stores nothing) when name or title is blank."""
        if not (draft.name and draft.title):
            logger.debug("stakeholder_draft_ignored", has_name=bool(draft.name), has_title=bool(draft.title))
            return None

        record = Stakeholder(id=uuid.uuid4(), **draft.model_dump())
        self._records.append(record)
        logger.info("stakeholder_added", stakeholder_id=str(record.id), total=len(self._records))
        return record

    def update(self, stakeholder_id: uuid.UUID, field: str, value) -> Stakeholder | None:
        """Replace one field on the matching record; None when the id is unknown.

        Numeric fields are parsed to int and are not range-clamped.
        """
        attr = _UPDATABLE_FIELDS.get(field)
        if attr is None:
            raise InvalidFieldError(
                f"Field '{field}' cannot be updated.",
                detail={"field": field, "allowed": sorted(set(_UPDATABLE_FIELDS.values()))},
            )

        record = self.get(stakeholder_id)
        if record is None:
            return None

        if attr in _INT_FIELDS:
            try:
                new_value = parse_int(value)
            except ValueError as exc:
                raise InvalidFieldError(
                    f"'{field}' must be a whole number.", detail={"field": field, "value": value}
                ) from exc
        elif attr == "relationship":
            try:
                new_value = Relationship(value)
            except ValueError as exc:
                raise InvalidFieldError(
                    f"Unknown relationship '{value}'.",
                    detail={"field": field, "allowed": [r.value for r in Relationship]},
                ) from exc
        elif attr == "reports_to":
            new_value = None if value is None else str(value)
        else:
            new_value = "" if value is None else str(value)

        setattr(record, attr, new_value)
        logger.info("stakeholder_updated", stakeholder_id=str(stakeholder_id), field=attr)
        return record

    def remove(self, stakeholder_id: uuid.UUID) -> bool:
        """Delete the matching record. Reports-to references to it are left dangling."""
        for index, record in enumerate(self._records):
            if record.id == stakeholder_id:
                del self._records[index]
                logger.info("stakeholder_removed", stakeholder_id=str(stakeholder_id), total=len(self._records))
                return True
        return False

    def snapshot(self) -> list[Stakeholder]:
        """Deep copies of every record, detached from later mutation."""
        return [record.model_copy(deep=True) for record in self._records]


# ── Dependency ──────────────────────────────────────────────────────────────

_store = StakeholderStore()


def get_store() -> StakeholderStore:
    """Process-wide store; overridden per test."""
    return _store
