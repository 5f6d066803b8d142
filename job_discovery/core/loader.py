"""JSON listing loader: reads raw job and bid records from disk.

The engine accepts whatever the listing source delivered; this module only
gets the records into memory. Shape validation happens in the pipeline.
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def load_records(path: str | Path, key: str | None = None) -> Any:
    """Load a listing file.

    The file holds either a JSON array of records, or an object whose
    ``key`` entry is that array (``{"jobs": [...]}``). Returns the decoded
    value without further checks, so a malformed listing reaches the
    pipeline as-is.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Listing file not found: {path}"
        raise FileNotFoundError(msg)

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ValueError(msg) from e

    if key is not None and isinstance(data, dict) and key in data:
        data = data[key]

    count = len(data) if isinstance(data, list) else 0
    logger.debug("Loaded %d records from %s", count, path)
    return data
