"""Provenance ledger for fetched icons (_sources.yaml)."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from pydantic import BaseModel, field_validator

from exceptions import ProvenanceError

logger = logging.getLogger(__name__)

LEDGER_FILENAME = "_sources.yaml"
LEDGER_HEADER = (
    "# Fetched icon sources\n"
    "# This file tracks where icons were fetched from for traceability\n\n"
)


class ProvenanceRecord(BaseModel):
    """Where and when a fetched icon came from, and under what license."""

    source: str
    fetched_at: str
    license: str

    @field_validator("fetched_at", mode="before")
    @classmethod
    def timestamp_to_string(cls, v):
        # YAML loads an unquoted ISO timestamp as a datetime
        if isinstance(v, datetime):
            if v.tzinfo is None:
                v = v.replace(tzinfo=timezone.utc)
            return iso_timestamp(v)
        return v


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with millisecond precision, e.g. 2026-01-05T10:00:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProvenanceLedger:
    """
    Append-only record keyed by "<collection>/<name>.svg".

    Every record() call reads the whole file, updates one entry and rewrites
    it. There is no locking: two processes writing to the same fetched-icon
    store at once can lose an update.
    """

    def __init__(self, root: Union[str, Path]):
        self.path = Path(root) / LEDGER_FILENAME

    @staticmethod
    def key_for(collection: str, name: str) -> str:
        return f"{collection}/{name}.svg"

    def read(self) -> Dict[str, ProvenanceRecord]:
        """
        Load all records. A missing ledger is empty.

        Raises:
            ProvenanceError: If the file exists but cannot be parsed
        """
        if not self.path.exists():
            return {}
        try:
            raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
            if not isinstance(raw, dict):
                raise ValueError("top level must be a mapping")
            return {key: ProvenanceRecord.model_validate(value) for key, value in raw.items()}
        except (yaml.YAMLError, ValueError) as e:
            raise ProvenanceError(f"Cannot parse provenance ledger {self.path}: {e}") from e

    def get(self, collection: str, name: str) -> Optional[ProvenanceRecord]:
        return self.read().get(self.key_for(collection, name))

    def record(self, collection: str, name: str, source_url: str, license: str) -> ProvenanceRecord:
        """Add or refresh the entry for one icon and rewrite the ledger."""
        records = self.read()
        entry = ProvenanceRecord(source=source_url, fetched_at=iso_timestamp(), license=license)
        records[self.key_for(collection, name)] = entry

        self.path.parent.mkdir(parents=True, exist_ok=True)
        body = yaml.safe_dump(
            {key: value.model_dump() for key, value in records.items()},
            sort_keys=False,
            allow_unicode=True,
        )
        self.path.write_text(LEDGER_HEADER + body, encoding="utf-8")
        logger.debug(f"Recorded provenance for {self.key_for(collection, name)}")
        return entry
