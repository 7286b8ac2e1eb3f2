"""Building attachments from local files, with the per-file size cap."""

import base64
import logging
import mimetypes
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from .config import MAX_FILE_BYTES
from .schema import FileInput

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(path: Path) -> str:
    return mimetypes.guess_type(path.name)[0] or DEFAULT_MIME_TYPE


def load_attachment(path: Union[str, Path]) -> FileInput:
    """Read a file into a base64 FileInput."""
    path = Path(path)
    data = path.read_bytes()
    return FileInput(
        name=path.name,
        mime_type=guess_mime_type(path),
        data=base64.b64encode(data).decode("ascii"),
    )


def collect_attachments(
    paths: Iterable[Union[str, Path]],
    max_bytes: int = MAX_FILE_BYTES,
) -> Tuple[List[FileInput], List[str]]:
    """Load attachments, dropping files larger than max_bytes.

    Returns:
        (files, warnings): the accepted attachments in input order and one
        user-facing warning per dropped file
    """
    files: List[FileInput] = []
    warnings: List[str] = []
    limit_mb = max_bytes / (1024 * 1024)
    for p in paths:
        path = Path(p)
        if not path.is_file():
            raise FileNotFoundError(f"Attachment not found: {path}")
        size = path.stat().st_size
        if size > max_bytes:
            message = f"File {path.name} is too large. Max {limit_mb:g}MB."
            logger.warning(message)
            warnings.append(message)
            continue
        files.append(load_attachment(path))
    return files, warnings
