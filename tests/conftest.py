import pytest

from es_migration.errors import TransportError
from es_migration.models import DocumentFailure, MigrationRequest, TransferOutcome


class FakeStore:
    """In-memory document store speaking the DocumentStore interface."""

    def __init__(self):
        self.indices = {}
        self.aliases = {}
        self.created = []
        self.alias_updates = []
        self.reindex_calls = []
        self.acknowledge = True
        self.alias_acknowledge = True
        self.fail_on = set()
        self.rejected_ids = set()

    def add_index(self, name, docs=(), mapping=None, settings=None):
        self.indices[name] = {
            "docs": dict(docs),
            "mapping": mapping if mapping is not None else {"mappings": {"properties": {}}},
            "settings": settings if settings is not None else {"index": {"number_of_shards": "1"}},
        }

    def bind_alias(self, alias, *indices):
        self.aliases.setdefault(alias, []).extend(indices)

    def _check(self, operation):
        if operation in self.fail_on:
            raise TransportError(f"{operation} failed")

    def _resolve(self, name):
        if name in self.indices:
            return name
        return self.aliases[name][0]

    def index_exists(self, host, name):
        self._check("index_exists")
        return name in self.indices or bool(self.aliases.get(name))

    def get_mapping(self, host, index):
        self._check("get_mapping")
        return self.indices[self._resolve(index)]["mapping"]

    def get_settings(self, host, index):
        self._check("get_settings")
        return self.indices[self._resolve(index)]["settings"]

    def create_index(self, host, name, body):
        self._check("create_index")
        self.created.append((name, body))
        if self.acknowledge:
            mapping = {k: v for k, v in body.items() if k != "settings"}
            self.add_index(name, mapping=mapping, settings=body.get("settings", {}))
        return self.acknowledge

    def bulk_reindex(self, source_host, source_index, target_host, target_index,
                     batch_size, on_progress=None):
        self._check("bulk_reindex")
        self.reindex_calls.append((source_index, target_index, batch_size))
        docs = list(self.indices[self._resolve(source_index)]["docs"].items())
        target = self.indices[target_index]["docs"]
        size = batch_size if batch_size > 0 else 500
        outcome = TransferOutcome()
        for start in range(0, len(docs), size):
            for doc_id, source in docs[start:start + size]:
                if doc_id in self.rejected_ids:
                    outcome.failure_count += 1
                    outcome.errors.append(
                        DocumentFailure(target_index, "_doc", doc_id, "mapper_parsing_exception: bad")
                    )
                else:
                    target[doc_id] = source
                    outcome.success_count += 1
            if on_progress is not None:
                on_progress(min(start + size, len(docs)), len(docs))
        return outcome

    def get_alias_bindings(self, host):
        self._check("get_alias_bindings")
        return {alias: list(indices) for alias, indices in self.aliases.items() if indices}

    def update_aliases(self, host, removals, additions):
        self._check("update_aliases")
        self.alias_updates.append((list(removals), list(additions)))
        for index, alias in removals:
            self.aliases[alias].remove(index)
        for index, alias in additions:
            self.aliases.setdefault(alias, []).append(index)
        return self.alias_acknowledge


def replay(*values):
    """Return a read() callable replaying the given answers."""
    replies = iter(values)

    def read(prompt):
        try:
            return next(replies)
        except StopIteration:
            raise EOFError("no more input")
    return read


@pytest.fixture
def answers():
    return replay


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def orders_store(store):
    store.add_index(
        "orders",
        docs={"1": {"sku": "a"}, "2": {"sku": "b"}, "3": {"sku": "c"}},
        mapping={"mappings": {"properties": {"sku": {"type": "keyword"}}}},
        settings={"index": {"number_of_shards": "1", "number_of_replicas": "0"}},
    )
    return store


@pytest.fixture
def request_for():
    def build(source="orders", target=None, mapping=None, batch_size=2):
        return MigrationRequest.build(
            source_index=source,
            target_index=target,
            source_host="http://es:9200",
            target_host="http://es:9200",
            explicit_mapping=mapping,
            batch_size=batch_size,
        )
    return build
