"""
Object key conventions shared by the ingress, scratch space and controller.

Raw key:       {name}              (object name in the raw bucket)
Processed key: processed-{name}    (object name in the processed bucket)

A key is used verbatim as a local file name under a scratch root, so it must be a
single path segment. validate_object_key returns a reason string for unusable keys
and None for usable ones. Callers decide how to report the reason.
"""

PROCESSED_KEY_PREFIX = "processed-"

# Keys double as local file names; common filesystems cap a name at 255 bytes.
# Stricter than the 1024-byte GCS object-name limit.
MAX_KEY_BYTES = 255

_FORBIDDEN_SEGMENTS = (".", "..")


def derive_processed_key(source_key: str) -> str:
    """Return the processed object key for a raw object key."""
    return f"{PROCESSED_KEY_PREFIX}{source_key}"


def validate_object_key(key: object) -> str | None:
    """Return why key cannot be used as a job key, or None when it can."""
    if not isinstance(key, str):
        return "key must be a string"
    if not key.strip():
        return "key must be non-empty"
    if "/" in key or "\\" in key:
        return f"key must not contain path separators: {key!r}"
    if key in _FORBIDDEN_SEGMENTS:
        return f"key must not be a relative path segment: {key!r}"
    if "\x00" in key:
        return "key must not contain NUL bytes"
    if len(key.encode("utf-8")) > MAX_KEY_BYTES:
        return f"key exceeds {MAX_KEY_BYTES} bytes"
    return None
