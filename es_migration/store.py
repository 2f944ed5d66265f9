# store.py

import logging

from elasticsearch import exceptions, helpers

from es_migration.config import SCROLL, get_client
from es_migration.errors import TransportError
from es_migration.models import DocumentFailure, TransferOutcome

logger = logging.getLogger("es_migration.store")

# Chunk size elasticsearch.helpers.bulk uses when none is given
DEFAULT_CHUNK_SIZE = 500

STORE_ERRORS = (exceptions.ApiError, exceptions.TransportError, helpers.ScanError)


def _body(resp):
    """Unwrap an elastic_transport response into its plain dict."""
    return getattr(resp, "body", resp)


def _first_index(resp, what, index):
    # An alias resolves to its concrete index, so the key is not always `index`
    body = _body(resp)
    if not body:
        raise TransportError(f"No {what} returned for <{index}>")
    return next(iter(body.values()))


def _batches(hits, size):
    batch = []
    for hit in hits:
        batch.append(hit)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def _document_failure(item):
    """
    Turn one failed bulk item into a DocumentFailure.

    Items look like {"index": {"_index": ..., "_id": ..., "status": 400, "error": {...}}}.
    """
    op = next(iter(item.values()))
    error = op.get("error")
    if isinstance(error, dict):
        error = "%s: %s" % (error.get("type", "error"), error.get("reason", ""))
    elif error is None:
        error = "status %s" % op.get("status")
    return DocumentFailure(
        index=op.get("_index", ""),
        doc_type=op.get("_type", "_doc"),
        doc_id=str(op.get("_id", "")),
        error=str(error),
    )


class DocumentStore:
    """
    Thin adapter over the Elasticsearch admin and bulk APIs used by a migration.

    Every Elasticsearch exception is re-raised as es_migration.errors.TransportError.
    One client is kept per host.
    """

    def __init__(self, client_factory=get_client):
        self._client_factory = client_factory
        self._clients = {}

    def client(self, host):
        if host not in self._clients:
            self._clients[host] = self._client_factory(host)
        return self._clients[host]

    def index_exists(self, host, name):
        try:
            return bool(self.client(host).indices.exists(index=name))
        except STORE_ERRORS as e:
            raise TransportError(f"Error verifying if index <{name}> exists: {e}") from e

    def get_mapping(self, host, index):
        try:
            resp = self.client(host).indices.get_mapping(index=index)
        except STORE_ERRORS as e:
            raise TransportError(f"Error getting mapping of index <{index}>: {e}") from e
        return dict(_first_index(resp, "mapping", index))

    def get_settings(self, host, index):
        try:
            resp = self.client(host).indices.get_settings(index=index)
        except STORE_ERRORS as e:
            raise TransportError(f"Error getting settings of index <{index}>: {e}") from e
        return dict(_first_index(resp, "settings", index).get("settings", {}))

    def create_index(self, host, name, body):
        try:
            resp = self.client(host).indices.create(index=name, body=body)
        except STORE_ERRORS as e:
            raise TransportError(f"Error creating new index <{name}>: {e}") from e
        return bool(_body(resp).get("acknowledged"))

    def count(self, host, index):
        try:
            return int(self.client(host).count(index=index)["count"])
        except STORE_ERRORS as e:
            raise TransportError(f"Error counting documents of <{index}>: {e}") from e

    def bulk_reindex(self, source_host, source_index, target_host, target_index,
                     batch_size, on_progress=None):
        """
        Copy every document of source_index into target_index.

        Documents are scrolled from the source and written to the target in
        batches of batch_size, keeping their _id. on_progress(processed, total)
        is called after each batch, or once with processed=0 when the source
        is empty. Failed documents are collected in the
        returned TransferOutcome; a failing scroll or bulk request raises.
        """
        chunk_size = batch_size if batch_size > 0 else DEFAULT_CHUNK_SIZE
        total = self.count(source_host, source_index)
        source = self.client(source_host)
        target = self.client(target_host)

        outcome = TransferOutcome()
        processed = 0
        try:
            hits = helpers.scan(source, index=source_index, size=chunk_size, scroll=SCROLL)
            for batch in _batches(hits, chunk_size):
                actions = [
                    {"_index": target_index, "_id": hit["_id"], "_source": hit["_source"]}
                    for hit in batch
                ]
                ok, failed = helpers.bulk(
                    target, actions,
                    chunk_size=len(actions),
                    raise_on_error=False,
                    stats_only=False
                )
                outcome.success_count += ok
                outcome.failure_count += len(failed)
                outcome.errors.extend(_document_failure(item) for item in failed)
                processed += len(batch)
                logger.debug("Bulk of %d documents: %d ok, %d failed", len(batch), ok, len(failed))
                if on_progress is not None:
                    on_progress(processed, total)
            if processed == 0 and on_progress is not None:
                on_progress(0, total)
        except STORE_ERRORS as e:
            raise TransportError(f"Error reindexing <{source_index}> to <{target_index}>: {e}") from e
        return outcome

    def get_alias_bindings(self, host):
        """Return {alias: [index, ...]} for every alias on the host."""
        try:
            resp = _body(self.client(host).indices.get_alias())
        except STORE_ERRORS as e:
            raise TransportError(f"Error getting aliases: {e}") from e

        bindings = {}
        for index, info in resp.items():
            for alias in info.get("aliases", {}):
                bindings.setdefault(alias, []).append(index)
        return bindings

    def update_aliases(self, host, removals, additions):
        """
        Apply every (index, alias) removal and addition in a single _aliases call.
        """
        actions = [{"remove": {"index": index, "alias": alias}} for index, alias in removals]
        actions += [{"add": {"index": index, "alias": alias}} for index, alias in additions]
        try:
            resp = self.client(host).indices.update_aliases(body={"actions": actions})
        except STORE_ERRORS as e:
            raise TransportError(f"Error updating aliases: {e}") from e
        return bool(_body(resp).get("acknowledged", True))
