"""
Archive Streamer

Architectural Intent:
- Serializes a file manifest into a gzip-compressed ustar stream
- Writes incrementally into any binary sink (typically a pipe feeding the
  remote extraction command), never holding the whole archive in memory
- Always closes tar writer, gzip writer and sink, in that order, so the
  consumer sees end-of-stream even when encoding fails halfway
"""

import gzip
import io
import logging
import tarfile
import time
from typing import BinaryIO, Iterable, Optional
from fury.domain.errors import StreamingError
from fury.domain.value_objects.file_entry import File

logger = logging.getLogger(__name__)


def _tar_info(entry: File, mtime: float) -> tarfile.TarInfo:
    info = tarfile.TarInfo(name=entry.path)
    info.mode = entry.mode
    info.uname = entry.owner
    info.gname = entry.group
    info.mtime = int(mtime)
    if entry.is_dir:
        info.type = tarfile.DIRTYPE
    else:
        info.type = tarfile.REGTYPE
        info.size = len(entry.contents)
    return info


def stream_tar_gz(
    out: BinaryIO, files: Iterable[File], mtime: Optional[float] = None
) -> None:
    """Writes files, in the given order, as a .tar.gz stream into out.

    Raises StreamingError chained from the first I/O or encoding error.
    Any other exception propagates unchanged, after everything is closed.
    """
    now = time.time() if mtime is None else mtime
    first_error: Optional[BaseException] = None
    gz = None
    tar = None
    count = 0

    try:
        gz = gzip.GzipFile(fileobj=out, mode="wb", mtime=int(now))
        tar = tarfile.open(fileobj=gz, mode="w|", format=tarfile.USTAR_FORMAT)
        for entry in files:
            info = _tar_info(entry, now)
            if entry.is_dir:
                tar.addfile(info)
            else:
                tar.addfile(info, io.BytesIO(entry.contents))
            count += 1
    except (OSError, ValueError, tarfile.TarError) as e:
        first_error = e
    finally:
        for writer in (tar, gz, out):
            if writer is None:
                continue
            try:
                writer.close()
            except (OSError, ValueError, tarfile.TarError) as e:
                if first_error is None:
                    first_error = e

    if first_error is not None:
        raise StreamingError(
            f"writing archive failed after {count} entries: {first_error}"
        ) from first_error
    logger.debug("Streamed %d entries", count)
