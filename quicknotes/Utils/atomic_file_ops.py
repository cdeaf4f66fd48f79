"""
Crash-safe writes for the notes and settings files.

Content goes to a hidden temporary file beside the target, is flushed to disk
and then renamed over the target, so a reader sees either the previous file
or the complete new one.
"""

import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Iterator, Optional, Union

from loguru import logger


def _discard_temp_file(temp_path: Optional[str]) -> None:
    """Remove a leftover temporary file, ignoring a file that is already gone."""
    if not temp_path:
        return
    try:
        os.unlink(temp_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {temp_path}: {e}")


@contextmanager
def _replacing(target: Path, encoding: str, mode: int) -> Iterator[IO[str]]:
    """Yield a text handle whose contents replace ``target`` on a clean exit."""
    target.parent.mkdir(parents=True, exist_ok=True)
    # Same directory as the target, otherwise os.replace may cross filesystems
    handle, temp_path = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(handle, "w", encoding=encoding) as stream:
            yield stream
            stream.flush()
            os.fsync(stream.fileno())
        os.chmod(temp_path, mode)
        os.replace(temp_path, target)
    except BaseException:
        _discard_temp_file(temp_path)
        raise


def atomic_write_text(
    file_path: Union[str, Path],
    content: str,
    encoding: str = "utf-8",
    mode: int = 0o644,
) -> None:
    """
    Replace ``file_path`` with ``content`` in one step.

    Missing parent directories are created.

    Raises:
        OSError: The temporary file could not be written or moved into place.
            The target is left as it was.
    """
    target = Path(file_path)
    try:
        with _replacing(target, encoding, mode) as stream:
            stream.write(content)
    except OSError as e:
        logger.error(f"Atomic write to {target} failed: {e}")
        raise
    logger.debug(f"Wrote {len(content)} chars to {target}")


def atomic_write_json(
    file_path: Union[str, Path],
    data: Any,
    encoding: str = "utf-8",
    mode: int = 0o644,
    indent: Optional[int] = 2,
) -> None:
    """Dump ``data`` as JSON (non-ASCII kept as is) and write it with ``atomic_write_text``.

    Raises TypeError before touching the disk when ``data`` is not serializable.
    """
    atomic_write_text(file_path, json.dumps(data, indent=indent, ensure_ascii=False), encoding=encoding, mode=mode)
