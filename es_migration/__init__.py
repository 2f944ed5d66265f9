"""Zero-downtime Elasticsearch index migration: copy an index and move its alias."""

from es_migration.errors import MigrationError
from es_migration.migration import Migrator
from es_migration.models import MigrationRequest, MigrationResult, TransferOutcome
from es_migration.store import DocumentStore

__all__ = [
    "DocumentStore",
    "MigrationError",
    "MigrationRequest",
    "MigrationResult",
    "Migrator",
    "TransferOutcome",
]
