# coordinator.py

import logging
from datetime import timedelta

from es_migration.errors import TransferFailed, TransportError

logger = logging.getLogger("es_migration.coordinator")


def transfer_documents(store, request, tracker):
    """
    Copy all documents from the source index to the target index.

    Documents that fail individually are reported but do not fail the
    transfer; only a failure of the bulk operation itself does.

    :param store: DocumentStore (or anything with the same bulk_reindex).
    :param request: The validated MigrationRequest.
    :param tracker: ProgressTracker owned by this run.
    :return: TransferOutcome with counts, failed documents and elapsed time.
    """
    logger.info("🚀 Starting reindexing <%s> → <%s>...", request.source_index, request.target_index)
    tracker.start()
    try:
        outcome = store.bulk_reindex(
            request.source_host, request.source_index,
            request.target_host, request.target_index,
            request.batch_size, tracker.update
        )
    except TransportError as e:
        raise TransferFailed(f"Error trying reindexing: {e}") from e
    outcome.elapsed = tracker.elapsed

    logger.info(
        "Reindexing completed in <%s>, %d documents succeeded and %d failed",
        timedelta(seconds=outcome.elapsed), outcome.success_count, outcome.failure_count
    )
    if outcome.errors:
        logger.warning("❗ Some documents could not be indexed...")
        for failure in outcome.errors:
            logger.error("Index[%s] Type[%s] Id[%s]: %s",
                         failure.index, failure.doc_type, failure.doc_id, failure.error)
    return outcome


def repoint_alias(store, request):
    """
    Move the source alias, if the source name is one, onto the target index.

    The bindings are read once. Every (old index, alias) pair is removed and
    (target index, alias) added in one _aliases request, so readers never see
    the alias unbound. A bare source index is left alone.

    :return: The indices the alias used to point to; empty for a bare index.
    """
    alias = request.source_index
    bindings = store.get_alias_bindings(request.target_host)
    old_indices = list(bindings.get(alias, []))
    if not old_indices:
        logger.info("<%s> is not an alias; no alias to update", alias)
        return []

    removals = [(index, alias) for index in old_indices]
    additions = [(request.target_index, alias)]
    if not store.update_aliases(request.target_host, removals, additions):
        logger.warning("❗ Alias update for <%s> was not acknowledged; check it points to <%s>",
                       alias, request.target_index)
        return old_indices

    logger.info("🔗 Alias <%s>: %s was removed and now points to <%s>",
                alias, old_indices, request.target_index)
    return old_indices
