"""CLI exit codes and argument handling."""

import json

import pytest

from es_migration.main import main, read_mapping
from es_migration.errors import ValidationError


def test_successful_run_exits_zero(orders_store):
    assert main(["--index", "orders", "--new-index", "orders-v2"], store=orders_store) == 0
    assert len(orders_store.indices["orders-v2"]["docs"]) == 3


def test_declined_confirmation_exits_zero(orders_store):
    orders_store.add_index("orders-v2")
    code = main(["--index", "orders", "--new-index", "orders-v2"],
                store=orders_store, confirm=lambda message: False)
    assert code == 0
    assert orders_store.reindex_calls == []


def test_missing_source_exits_non_zero(store):
    assert main(["--index", "missing"], store=store) == 1


def test_index_flag_is_required(store):
    with pytest.raises(SystemExit) as info:
        main([], store=store)
    assert info.value.code == 2


def test_mapping_file_is_used(store, tmp_path):
    store.add_index("orders-v1", docs={"1": {"sku": "a"}})
    store.bind_alias("orders-live", "orders-v1")
    mapping = {"mappings": {"properties": {"sku": {"type": "text"}}}}
    path = tmp_path / "mapping.json"
    path.write_text(json.dumps(mapping))

    code = main(["--index", "orders-live", "--new-index", "orders-v2",
                 "--new-mapping", str(path), "--bulk-size", "10"], store=store)

    assert code == 0
    assert store.created == [("orders-v2", mapping)]
    assert store.reindex_calls == [("orders-live", "orders-v2", 10)]
    assert store.aliases["orders-live"] == ["orders-v2"]


def test_unreadable_mapping_file_exits_non_zero(orders_store, tmp_path):
    code = main(["--index", "orders", "--new-mapping", str(tmp_path / "nope.json")], store=orders_store)
    assert code == 1
    assert orders_store.created == []


def test_mapping_must_be_json_object(tmp_path):
    path = tmp_path / "mapping.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValidationError):
        read_mapping(str(path))


def test_mapping_must_be_valid_json(tmp_path):
    path = tmp_path / "mapping.json"
    path.write_text("{not json")
    with pytest.raises(ValidationError):
        read_mapping(str(path))


def test_host_without_scheme_exits_non_zero():
    code = main(["--index", "orders", "--from-host", "localhost:9200", "--to-host", "localhost:9200"])
    assert code == 1
