# main.py
import argparse
import json
import logging
import sys

from es_migration.config import BATCH_SIZE, DEFAULT_HOST, logger, setup_logging
from es_migration.errors import MigrationError, ValidationError
from es_migration.migration import Migrator
from es_migration.models import MigrationRequest
from es_migration.prompt import ask_for_confirmation
from es_migration.store import DocumentStore

# To copy an index with a generated name:
# es-migration --index orders

# To move an alias onto an index built from a new mapping:
# es-migration --index orders-live --new-index orders-v2 --new-mapping mapping.json


def read_mapping(path):
    """Load the replacement mapping file; it must hold a JSON object."""
    try:
        with open(path, "r") as f:
            mapping = json.load(f)
    except OSError as e:
        raise ValidationError(f"Error reading mapping file '{path}': {e}") from e
    except ValueError as e:
        raise ValidationError(f"Mapping file '{path}' is not valid JSON: {e}") from e

    if not isinstance(mapping, dict):
        raise ValidationError(f"Mapping file '{path}' must contain a JSON object")
    logger.debug("New mapping of %s:", path)
    logger.debug(json.dumps(mapping, indent=2, sort_keys=True))
    return mapping


def build_parser():
    parser = argparse.ArgumentParser(
        description="Reindex/copy an Elasticsearch index and move its alias to the copy."
    )
    parser.add_argument(
        "--from-host", default=DEFAULT_HOST,
        help="Elasticsearch host to get data from (default: %(default)s)."
    )
    parser.add_argument(
        "--index", required=True,
        help="Name of the index or alias to reindex/copy."
    )
    parser.add_argument(
        "--to-host", default=DEFAULT_HOST,
        help="Elasticsearch host to write data to (default: %(default)s)."
    )
    parser.add_argument(
        "--new-index",
        help="Name of the new index (default: <index>-<random suffix>)."
    )
    parser.add_argument(
        "--new-mapping",
        help="Path to a JSON file with the mapping of the new index."
    )
    parser.add_argument(
        "--bulk-size", type=int, default=BATCH_SIZE,
        help="Amount of documents to copy in each request (default: %(default)s)."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug output, including the new mapping."
    )
    return parser


def main(argv=None, store=None, confirm=None):
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        mapping = read_mapping(args.new_mapping) if args.new_mapping else None
        request = MigrationRequest.build(
            source_index=args.index,
            target_index=args.new_index,
            source_host=args.from_host,
            target_host=args.to_host,
            explicit_mapping=mapping,
            batch_size=args.bulk_size,
        )
        migrator = Migrator(store or DocumentStore(), confirm=confirm or ask_for_confirmation)
        result = migrator.run(request)
    except MigrationError as e:
        logger.error("❌ %s", e)
        return 1

    if result.aborted:
        logger.info("Nothing was reindexed. Exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
