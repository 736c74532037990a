"""Single-file cache of the scraped disclosure snapshot.

The snapshot is the structured alternative to the disclosures CSV. Upstream
returns a JSON list whose first element carries the real payload as a JSON
*string* under "full_data"; it is unpacked into a flat document:

    {ok, source, page, fetchedAt, lastTrade, isCurrentMember, networth,
     houseInfo, totalTrades, tradeVolume, trades: [...]}

Only one snapshot file is kept; each refresh replaces it atomically.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path

from marketdash.exceptions import SnapshotError
from marketdash.logging import get_logger

logger = get_logger(__name__)


def parse_get_pelosi_payload(
    raw: object,
    source: str,
    page: str,
    fetched_at: datetime | None = None,
) -> dict:
    """Unpack the upstream payload into the snapshot document shape.

    Raises:
        SnapshotError: If the payload does not carry a full_data JSON string.
    """
    first = raw[0] if isinstance(raw, list) and raw else None
    full_str = first.get("full_data") if isinstance(first, dict) else None
    if not isinstance(full_str, str) or not full_str:
        raise SnapshotError("Unexpected snapshot payload shape (missing full_data)")

    try:
        full = json.loads(full_str)
    except ValueError as e:
        raise SnapshotError(f"full_data is not valid JSON: {e}") from e
    if not isinstance(full, dict):
        raise SnapshotError("full_data must decode to an object")

    fetched = fetched_at or datetime.now(timezone.utc)
    trades = full.get("data")
    return {
        "ok": True,
        "source": source,
        "page": page,
        "fetchedAt": fetched.isoformat(),
        "lastTrade": full.get("last_trade") or None,
        "isCurrentMember": full.get("is_current_member") or None,
        "networth": full.get("networth"),
        "houseInfo": full.get("house_info_and_stuff") or None,
        "totalTrades": full.get("total_trades"),
        "tradeVolume": full.get("trade_volume"),
        "trades": trades if isinstance(trades, list) else [],
    }


class SnapshotStore:
    """Reads and atomically rewrites the cached snapshot JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> dict:
        """Load the snapshot document.

        Raises:
            SnapshotError: If the file is missing, unreadable, or not an object
                with a "trades" list.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise SnapshotError(f"Snapshot file not found: {self._path}") from e
        except OSError as e:
            raise SnapshotError(f"Cannot read snapshot file {self._path}: {e}") from e

        try:
            doc = json.loads(text)
        except ValueError as e:
            raise SnapshotError(f"Snapshot file is not valid JSON: {e}") from e

        if not isinstance(doc, dict) or not isinstance(doc.get("trades"), list):
            raise SnapshotError("Snapshot document has no trades list")
        return doc

    def save(self, doc: dict) -> None:
        """Write the document via a temp file + rename so readers never see a partial file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(doc, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp, self._path)
        logger.info(
            "snapshot_saved",
            path=str(self._path),
            trades=len(doc.get("trades", [])),
        )
