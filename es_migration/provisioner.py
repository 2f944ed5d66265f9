# provisioner.py

import enum
import logging

from es_migration.errors import IndexCreationFailed, MappingConflict, TransportError

logger = logging.getLogger("es_migration.provisioner")


class ProvisionDecision(enum.Enum):
    CREATED = "created"
    REUSED = "reused"
    DECLINED = "declined"


def provision_target(store, request, load_schema, confirm):
    """
    Make sure the target index exists before any document is copied.

    A missing target is created once, from the explicit mapping when one was
    given and from `load_schema()` (the source schema) otherwise. An existing target is
    reused only after the operator confirms through `confirm(message)`.
    """
    target = request.target_index
    exists = store.index_exists(request.target_host, target)

    if exists:
        if request.explicit_mapping is not None:
            raise MappingConflict(
                f"Index <{target}> already exists; refusing to apply the new mapping to it. "
                "Pick another target name or drop the existing index first."
            )
        question = (
            f"Index <{target}> already exists, do you want to index all documents "
            "without changing the current mapping? (yes/no) "
        )
        if not confirm(question):
            logger.info("Reindexing into existing index <%s> declined", target)
            return ProvisionDecision.DECLINED
        logger.info("Reusing existing index <%s>", target)
        return ProvisionDecision.REUSED

    if request.explicit_mapping is not None:
        body = request.explicit_mapping
    else:
        body = load_schema().to_body()

    try:
        acknowledged = store.create_index(request.target_host, target, body)
    except TransportError as e:
        raise IndexCreationFailed(str(e)) from e
    if not acknowledged:
        raise IndexCreationFailed(f"Was not possible to create new index <{target}>")

    logger.info("✅ New index <%s> was created!", target)
    return ProvisionDecision.CREATED
