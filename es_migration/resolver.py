# resolver.py

import logging

from es_migration.errors import SchemaFetchFailed, SourceNotFound, TransportError
from es_migration.models import ResolvedSchema

logger = logging.getLogger("es_migration.resolver")

# Read-only index settings the store reports but refuses on index creation
INTERNAL_SETTINGS = ("version", "uuid", "provided_name", "creation_date")


def strip_internal_settings(settings):
    """Drop the store-managed keys from the `index` block of a settings document."""
    index_settings = settings.get("index")
    if not isinstance(index_settings, dict):
        return dict(settings)
    cleaned = dict(settings)
    cleaned["index"] = {
        k: v for k, v in index_settings.items()
        if not k.startswith(INTERNAL_SETTINGS)
    }
    return cleaned


def check_source(store, request):
    """Fail with SourceNotFound unless the source index (or alias) exists."""
    if not store.index_exists(request.source_host, request.source_index):
        raise SourceNotFound(
            f"The index <{request.source_index}> doesn't exist, we need a valid index or alias"
        )


def resolve_schema(store, request):
    """
    Read the mapping and settings of the source index.

    Only called when a new target index has to be built from the source
    schema, so an existing target never triggers these reads.
    """
    try:
        mapping = store.get_mapping(request.source_host, request.source_index)
        settings = store.get_settings(request.source_host, request.source_index)
    except TransportError as e:
        raise SchemaFetchFailed(f"Error resolving schema of <{request.source_index}>: {e}") from e

    logger.info("📋 Resolved mapping and settings of <%s>", request.source_index)
    return ResolvedSchema(mapping=mapping, settings=strip_internal_settings(settings))
