# migration.py

import logging

from es_migration.coordinator import repoint_alias, transfer_documents
from es_migration.models import MigrationResult
from es_migration.progress import ProgressTracker
from es_migration.prompt import ask_for_confirmation
from es_migration.provisioner import ProvisionDecision, provision_target
from es_migration.resolver import check_source, resolve_schema

logger = logging.getLogger("es_migration.migration")


class Migrator:
    """Runs one index migration: resolve → provision → transfer → alias."""

    def __init__(self, store, confirm=ask_for_confirmation, progress_listener=None):
        self.store = store
        self.confirm = confirm
        self.progress_listener = progress_listener

    def run(self, request):
        logger.info("Migrating <%s> (%s) → <%s> (%s)",
                    request.source_index, request.source_host,
                    request.target_index, request.target_host)
        result = MigrationResult(target_index=request.target_index)

        check_source(self.store, request)

        decision = provision_target(
            self.store, request, lambda: resolve_schema(self.store, request), self.confirm
        )
        if decision is ProvisionDecision.DECLINED:
            result.aborted = True
            return result
        result.created = decision is ProvisionDecision.CREATED

        tracker = ProgressTracker(listener=self.progress_listener)
        result.outcome = transfer_documents(self.store, request, tracker)
        result.rebound_from = repoint_alias(self.store, request)

        logger.info("🎉 Migration of <%s> completed", request.source_index)
        return result
