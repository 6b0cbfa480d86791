import hashlib


def sha1(text: str) -> bytes:
    """SHA-1 digest of the UTF-8 encoded text

    Only used as a deterministic source of bits, never for integrity.

    Args:
        text (str): normalized licence plate

    Returns:
        bytes: 20 byte digest
    """
    return hashlib.sha1(text.encode('utf-8'), usedforsecurity=False).digest()
