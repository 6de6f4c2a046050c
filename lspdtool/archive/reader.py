# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Forward-only archive entry stream for lspdtool.

This module opens a gzip-compressed tar archive in stream mode ("r|gz")
and yields one ArchiveEntry per member, in archive order. Stream mode
cannot seek, so an entry's content is only readable while that entry is
the current one; read it inside the loop body or not at all.

Example:
    Walk an archive:
        ```python
        from pathlib import Path
        from lspdtool.archive import iter_archive_entries

        for entry in iter_archive_entries(Path("Talos_LightSPD.tar.gz")):
            if entry.path == "lightspd/version.txt":
                print(entry.read_text())
        ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
import tarfile
from typing import IO

from lspdtool.exceptions import ArchiveError
from lspdtool.logging import get_global_logger

_ARCHIVE_ERRORS = (tarfile.TarError, OSError, EOFError)


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of the archive.

    Attributes:
        path: Slash-delimited member path as stored in the archive.
        is_dir: True for directory members.

    """

    path: str
    is_dir: bool = False
    opener: Callable[[], IO[bytes] | None] | None = field(
        default=None, repr=False, compare=False
    )

    def read_bytes(self) -> bytes:
        """Read the entry's full content.

        Returns:
            The content, or b"" for entries without a data stream.

        Raises:
            ArchiveError: If the content can no longer be read (the stream
                has moved past this entry) or the read fails.

        """
        if self.opener is None:
            return b""
        try:
            handle = self.opener()
            if handle is None:
                return b""
            with handle:
                return handle.read()
        except _ARCHIVE_ERRORS as err:
            raise ArchiveError(f"failed to read {self.path}: {err}") from err

    def read_text(self, encoding: str = "utf-8") -> str:
        """Read and decode the entry's full content.

        Raises:
            ArchiveError: On read failure or if the content does not decode.

        """
        data = self.read_bytes()
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as err:
            raise ArchiveError(f"{self.path} is not valid {encoding}: {err}") from err


def iter_archive_entries(archive_path: Path) -> Iterator[ArchiveEntry]:
    """Yield the entries of a .tar.gz archive in archive order.

    Args:
        archive_path: Path to the gzip-compressed tar archive.

    Yields:
        ArchiveEntry for every member, directories included.

    Raises:
        ArchiveError: If the file cannot be opened, is not a gzip tar, or is
            truncated or corrupt.

    """
    logger = get_global_logger()
    logger.verbose("ARCHIVE", f"Opening {archive_path}")

    count = 0
    try:
        with tarfile.open(archive_path, mode="r|gz") as tar:
            for member in tar:
                count += 1
                logger.debug("ARCHIVE", f"Entry: {member.name}")
                opener = None
                if member.isfile():
                    opener = _member_opener(tar, member)
                yield ArchiveEntry(
                    path=member.name, is_dir=member.isdir(), opener=opener
                )
    except _ARCHIVE_ERRORS as err:
        raise ArchiveError(f"failed to read archive {archive_path}: {err}") from err

    logger.verbose("ARCHIVE", f"Read {count} entries")


def _member_opener(
    tar: tarfile.TarFile, member: tarfile.TarInfo
) -> Callable[[], IO[bytes] | None]:
    def _open() -> IO[bytes] | None:
        return tar.extractfile(member)

    return _open
