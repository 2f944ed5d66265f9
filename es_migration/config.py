# config.py
import logging
import os

from elasticsearch import Elasticsearch, exceptions

from es_migration.errors import TransportError, ValidationError

# === Configuration ===
DEFAULT_HOST = os.getenv("ES_HOST", "http://127.0.0.1:9200")
AUTH = {"user": os.getenv("ES_USERNAME"), "pass": os.getenv("ES_PASSWORD")}
BATCH_SIZE = int(os.getenv("ES_BATCH_SIZE", "500"))
REQUEST_TIMEOUT = int(os.getenv("ES_REQUEST_TIMEOUT", "600"))
SCROLL = os.getenv("ES_SCROLL", "10m")

# === Logging Setup ===
logger = logging.getLogger("es_migration")


def setup_logging(level=logging.INFO):
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        level=level
    )
    logger.setLevel(level)


# === Elasticsearch Clients ===
def get_client(host):
    """
    Build an Elasticsearch client for the given host and log the cluster version.

    Basic auth is used when ES_USERNAME and ES_PASSWORD are both set.
    """
    kwargs = {"request_timeout": REQUEST_TIMEOUT}
    if AUTH["user"] and AUTH["pass"]:
        kwargs["basic_auth"] = (AUTH["user"], AUTH["pass"])

    try:
        client = Elasticsearch(host, **kwargs)
    except ValueError as e:
        raise ValidationError(f"Invalid Elasticsearch host '{host}': {e}") from e

    try:
        version = client.info()["version"]["number"]
    except (exceptions.ApiError, exceptions.TransportError) as e:
        raise TransportError(f"Error connecting to '{host}': {e}") from e

    logger.info("🔌 Connected to Elasticsearch <%s>, version %s", host, version)
    return client
