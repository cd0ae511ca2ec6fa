"""Active identity and the time series scoped to it."""

from __future__ import annotations

from typing import Optional

import pandas as pd

from niceevents.event_classifier.errors import UnknownIdentity
from niceevents.utils.logging import get_logger

logger = get_logger(__name__)


class IdentitySelector:
    """Holds the currently selected identity over a long-format tracks DataFrame.

    Attributes:
        df: Tracks with one row per (identity, timestamp, metric) point.
        identity_col: Column holding the identity.
        time_col: Column holding the timestamp.
        metric_col: Column holding the plotted metric.
    """

    def __init__(
        self,
        df: pd.DataFrame,
        *,
        identity_col: str = "identity",
        time_col: str = "timestamp",
        metric_col: str = "metric",
    ) -> None:
        for col in (identity_col, time_col, metric_col):
            if col not in df.columns:
                raise ValueError(f"column '{col}' not found in dataframe columns")
        self.df = df
        self.identity_col = identity_col
        self.time_col = time_col
        self.metric_col = metric_col
        self._identities: list[str] = sorted(df[identity_col].dropna().astype(str).unique().tolist())
        self._active: Optional[str] = None

    @property
    def active_identity(self) -> Optional[str]:
        return self._active

    def identities(self) -> list[str]:
        """Sorted unique identities in the tracks data."""
        return list(self._identities)

    def select(self, identity: str) -> None:
        """Set the active identity.

        Raises:
            UnknownIdentity: If identity is not in the tracks data. The active
                identity is left unchanged.
        """
        identity = str(identity)
        if identity not in self._identities:
            raise UnknownIdentity(f"Unknown identity {identity!r}")
        if identity != self._active:
            logger.info("active identity %s -> %s", self._active, identity)
        self._active = identity

    def active_series(self) -> pd.DataFrame:
        """Rows for the active identity sorted by timestamp (empty if none selected)."""
        if self._active is None:
            return self.df.iloc[0:0]
        mask = self.df[self.identity_col].astype(str) == self._active
        return self.df.loc[mask].sort_values(self.time_col, kind="stable")
