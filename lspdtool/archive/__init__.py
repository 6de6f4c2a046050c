"""Archive access for lspdtool.

Public API:

- ArchiveEntry: One archive member (path, directory flag, readable content)
- iter_archive_entries: Forward-only iteration over a .tar.gz archive

Example:
    from pathlib import Path
    from lspdtool.archive import iter_archive_entries

    for entry in iter_archive_entries(Path("Talos_LightSPD.tar.gz")):
        print(entry.path)

"""

from .reader import ArchiveEntry, iter_archive_entries

__all__ = ["ArchiveEntry", "iter_archive_entries"]
