"""
Topic name resolution for deployments that remap logical topics.

The deployment hands the node a JSON document (normally in the TOPICS
environment variable):

    {"topics": [{"topic_name": "OUTGOING_MESSAGE", "topic_key": "..."}]}

The first entry matching the logical name supplies a key which is turned
into a valid ROS topic name by sanitize_and_checksum(). Any problem with
the document falls back to the node's default topic.
"""

import enum
import json
import os
from typing import Callable, Mapping, Optional

TOPICS_ENV_VAR = "TOPICS"

TOPIC_PREFIX = "ros2_"
MAX_TOPIC_LENGTH = 256

CHECKSUM_MULTIPLIER = 31
CHECKSUM_MODULUS = 1000000007

_ALLOWED_BYTES = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)

ConfigSource = Callable[[], Optional[str]]


class ResolutionFailure(enum.Enum):
    CONFIGURATION_ABSENT = "configuration_absent"
    CONFIGURATION_MALFORMED = "configuration_malformed"
    CONFIGURATION_SHAPE_MISMATCH = "configuration_shape_mismatch"
    TOPIC_NOT_FOUND = "topic_not_found"


class TopicResolutionError(Exception):
    """Raised by lookup_topic_key(); never escapes resolve_topic_name()."""

    def __init__(self, kind: ResolutionFailure, message: str):
        super().__init__(message)
        self.kind = kind


# -------------------------
# Encoding
# -------------------------
def _to_bytes(value: str) -> bytes:
    # surrogateescape restores raw bytes that os.environ could not decode
    return value.encode("utf-8", "surrogateescape")


def sanitize(value: str) -> str:
    return "".join(
        chr(b) if b in _ALLOWED_BYTES else "_" for b in _to_bytes(value)
    )


def checksum(value: str) -> str:
    acc = 0
    for b in _to_bytes(value):
        acc = (acc * CHECKSUM_MULTIPLIER + b) % CHECKSUM_MODULUS
    return str(acc)


def sanitize_and_checksum(
    value: str, prefix: str = TOPIC_PREFIX, max_length: int = MAX_TOPIC_LENGTH
) -> str:
    """
    Build "<prefix><sanitized value><checksum>" bounded to max_length.

    Only the sanitized part is truncated. The checksum is computed over the
    raw value, so keys that collide after sanitizing or truncation still
    get distinct names.
    """
    sanitized = sanitize(value)
    digest = checksum(value)

    budget = max(0, max_length - len(prefix) - len(digest))
    return prefix + sanitized[:budget] + digest


# -------------------------
# Configuration sources
# -------------------------
def environ_source(
    name: str = TOPICS_ENV_VAR, environ: Optional[Mapping[str, str]] = None
) -> ConfigSource:
    def read() -> Optional[str]:
        env = os.environ if environ is None else environ
        return env.get(name)

    return read


def static_source(blob: Optional[str]) -> ConfigSource:
    return lambda: blob


# -------------------------
# Lookup
# -------------------------
def _require_utf8(text: str) -> None:
    # undecodable env bytes and lone surrogates make the document invalid
    text.encode("utf-8")


def lookup_topic_key(search_topic: str, blob: Optional[str]) -> str:
    """
    Return the raw topic_key of the first usable entry for search_topic.

    Raises TopicResolutionError describing why no key could be found.
    """
    if blob is None:
        raise TopicResolutionError(
            ResolutionFailure.CONFIGURATION_ABSENT, "Topic configuration not set."
        )

    try:
        _require_utf8(blob)
        document = json.loads(blob)
    except (ValueError, RecursionError) as e:
        raise TopicResolutionError(
            ResolutionFailure.CONFIGURATION_MALFORMED,
            f"Error parsing topic configuration: {e}.",
        ) from e

    topics = document.get("topics") if isinstance(document, dict) else None
    if not isinstance(topics, list):
        raise TopicResolutionError(
            ResolutionFailure.CONFIGURATION_SHAPE_MISMATCH,
            "Topic configuration has no 'topics' list.",
        )

    for entry in topics:
        if not isinstance(entry, dict):
            continue
        if entry.get("topic_name") != search_topic:
            continue
        key = entry.get("topic_key")
        if isinstance(key, str):
            try:
                _require_utf8(key)
            except UnicodeEncodeError as e:
                # lone "\ud800"-style escapes
                raise TopicResolutionError(
                    ResolutionFailure.CONFIGURATION_MALFORMED,
                    f"Error parsing topic configuration: {e}.",
                ) from e
            return key

    raise TopicResolutionError(
        ResolutionFailure.TOPIC_NOT_FOUND,
        f"Topic {search_topic} not found or missing topic_key.",
    )


def resolve_topic_name(
    search_topic: str,
    default_value: str,
    source: Optional[ConfigSource] = None,
    logger=None,
) -> str:
    """
    Resolve a logical topic to the physical topic name to register.

    Returns sanitize_and_checksum(topic_key) for the first matching entry,
    otherwise default_value unchanged. Never raises on bad configuration;
    the reason for a fallback is logged at warning level.
    """
    if source is None:
        source = environ_source()
    if logger is None:
        from rclpy.logging import get_logger

        logger = get_logger("topic_names")

    try:
        key = lookup_topic_key(search_topic, source())
    except TopicResolutionError as e:
        logger.warning(f"{e} Using default value '{default_value}'.")
        return default_value

    return sanitize_and_checksum(key)
