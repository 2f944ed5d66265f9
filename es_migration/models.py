# models.py

import copy
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from es_migration.config import BATCH_SIZE, DEFAULT_HOST
from es_migration.errors import ValidationError


def default_target_name(source_index: str) -> str:
    """Return source_index with a fresh 12 character suffix, e.g. 'orders-3f9c0a1b2c4d'."""
    return f"{source_index}-{uuid.uuid4().hex[-12:]}"


@dataclass(frozen=True)
class MigrationRequest:
    source_host: str
    source_index: str
    target_host: str
    target_index: str
    explicit_mapping: Optional[Dict[str, Any]] = None
    batch_size: int = BATCH_SIZE

    @classmethod
    def build(
        cls,
        source_index: Optional[str],
        target_index: Optional[str] = None,
        source_host: Optional[str] = None,
        target_host: Optional[str] = None,
        explicit_mapping: Optional[Dict[str, Any]] = None,
        batch_size: int = BATCH_SIZE,
    ) -> "MigrationRequest":
        """
        Validate the operator's input and fill in defaults.

        Hosts fall back to DEFAULT_HOST and a missing target index gets a
        generated name. Copying an index onto itself on the same host is rejected.
        """
        if not source_index:
            raise ValidationError("A source index (or alias) is required to reindex/copy")

        source_host = source_host or DEFAULT_HOST
        target_host = target_host or DEFAULT_HOST
        target_index = target_index or default_target_name(source_index)

        if source_host == target_host and source_index == target_index:
            raise ValidationError(
                f"Target index <{target_index}> must differ from the source index on the same host"
            )
        if explicit_mapping is not None and not isinstance(explicit_mapping, dict):
            raise ValidationError("The new mapping must be a JSON object")

        return cls(
            source_host=source_host,
            source_index=source_index,
            target_host=target_host,
            target_index=target_index,
            explicit_mapping=explicit_mapping,
            batch_size=batch_size,
        )


@dataclass
class ResolvedSchema:
    """Mapping and settings of the source index, as returned by the store."""

    mapping: Dict[str, Any]
    settings: Dict[str, Any]

    def to_body(self) -> Dict[str, Any]:
        # Settings ride along inside the mapping body so one create call rebuilds the index
        body = copy.deepcopy(self.mapping)
        body["settings"] = copy.deepcopy(self.settings)
        return body


@dataclass(frozen=True)
class DocumentFailure:
    index: str
    doc_type: str
    doc_id: str
    error: str


@dataclass
class TransferOutcome:
    success_count: int = 0
    failure_count: int = 0
    errors: List[DocumentFailure] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count


@dataclass
class MigrationResult:
    target_index: str
    created: bool = False
    aborted: bool = False
    outcome: Optional[TransferOutcome] = None
    rebound_from: List[str] = field(default_factory=list)
