import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from galaxy_export.config import settings
from galaxy_export.models.schemas import GalaxySnapshot
from galaxy_export.utils.errors import OutputWriteError, SerializationError

logger = logging.getLogger(__name__)


def serialize_snapshot(snapshot: GalaxySnapshot) -> str:
    try:
        return snapshot.model_dump_json(indent=2, by_alias=True, exclude_none=True)
    except (ValueError, TypeError) as e:
        raise SerializationError(f"Failed to marshal JSON: {e}") from e


def write_snapshot(snapshot: GalaxySnapshot, path) -> Path:
    """Write the snapshot to ``path``, replacing any existing file.

    The data goes to a temporary sibling first, so a failed write never
    leaves a partial file behind.
    """
    data = serialize_snapshot(snapshot)
    target = Path(path)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.chmod(tmp_name, settings.OUTPUT_MODE)
        os.replace(tmp_name, target)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(f"Failed to write file: {e}") from e

    logger.debug(f"Wrote {len(data)} bytes to {target}")
    return target


def read_snapshot(path) -> GalaxySnapshot:
    try:
        with open(path, encoding="utf-8") as f:
            return GalaxySnapshot.model_validate_json(f.read())
    except ValidationError as e:
        raise SerializationError(f"Failed to parse snapshot {path}: {e.error_count()} invalid field(s)") from e
