from typing import Iterator, List, Optional

import pandas as pd

from shopfinder.models import ResolvedRecord


class SessionHistory:
    """
    In-memory history of resolved records for one session.

    Created when the application starts and passed to whoever needs it;
    `clear()` is the explicit reset. Newest records come first.
    """

    def __init__(self):
        self._records: List[ResolvedRecord] = []

    def add(self, record: ResolvedRecord) -> None:
        self._records.insert(0, record)

    def latest(self) -> Optional[ResolvedRecord]:
        return self._records[0] if self._records else None

    def clear(self) -> None:
        self._records.clear()

    def __iter__(self) -> Iterator[ResolvedRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per record, oldest first."""
        rows = [record.to_row() for record in reversed(self._records)]
        return pd.DataFrame(rows)

    def export_csv(self, path: str) -> None:
        self.to_dataframe().to_csv(path, index=False)
