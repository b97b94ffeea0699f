"""ID and value generators (CUID2 ids, stored file names)."""

import os
import secrets
import time

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2)."""
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_storage_name(original_filename: str) -> str:
    """Return a unique blob name: file-<epoch ms>-<9 random digits><ext>.

    Only the extension of the client-supplied name is kept, lower-cased.
    """
    _, ext = os.path.splitext(os.path.basename(original_filename or ""))
    ext = ext.lower() if ext and len(ext) <= 16 and ext[1:].isalnum() else ""
    millis = int(time.time() * 1000)
    rand = secrets.randbelow(1_000_000_000)
    return f"file-{millis}-{rand:09d}{ext}"
