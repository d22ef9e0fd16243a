"""TableLoader protocol."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sheetquery._table import Table


@runtime_checkable
class TableLoader(Protocol):
    """Protocol for anything that can produce a Table from a source."""

    def load(self, path: str | os.PathLike[str], sheet: str | None = None) -> Table:
        """Read *sheet* from *path*. The first row supplies column names.

        Raises SourceNotFoundError / SheetNotFoundError. Any underlying
        file handle is released before returning or raising.
        """
        ...
