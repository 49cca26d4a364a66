"""Internal constants shared across the library."""

#: Prefix added to every structured log message sent to the host.
LOG_TAG = "[CREATIVE]"

#: Level and message are cut to this many characters before validation.
MAX_LOG_FIELD_LENGTH = 32

#: Serialized context above this many characters is replaced by ``{}``.
MAX_LOG_CONTEXT_SIZE = 255

# ------------------------------------------------------------------
# Host protocol
# ------------------------------------------------------------------

PROTOCOL_VERSION = "2"
VERSION_SEPARATOR = "@"

READY_EVENT = "ready"
LOG_EVENT = "log"

#: Durable key used by ``BaseCreative.next_screen``.
LAST_SCREEN_KEY = "lastScreen"

#: Container identifiers used by the screen registry.
SCREEN_CONTAINER_PREFIX = "screen_"
FALLBACK_CONTAINER = "fallback"
