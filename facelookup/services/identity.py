"""Derivation of the external identifier attached to indexed faces."""
import hashlib


def derive_external_id(bucket: str, object_key: str) -> str:
    """Return a stable identifier for an S3 object.

    The identifier is the hex MD5 digest of the bucket name followed by the
    key. It correlates a collection face with its source object without
    storing the object reference in the collection.

    Raises:
        TypeError: If either argument is not a string
    """
    if not isinstance(bucket, str) or not isinstance(object_key, str):
        raise TypeError("bucket and object_key must be strings")
    return hashlib.md5((bucket + object_key).encode("utf-8")).hexdigest()
