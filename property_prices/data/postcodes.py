"""Read-only access to the Code-Point Open postcode table in SQLite.

The table is built by `property_prices.data.build_postcodes`. Each postcode
is also stored in an R*Tree as a zero-area rectangle at its easting/northing,
so bounding-box queries only touch the index.
"""

import logging
import sqlite3
import threading
from pathlib import Path

from property_prices.config import settings
from property_prices.errors import ReferenceDataError
from property_prices.models.postcode import PostcodeRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROWS = 2000

SCHEMA = """
    CREATE TABLE postcodes (
        postcode TEXT PRIMARY KEY,
        positional_quality INTEGER,
        easting INTEGER,
        northing INTEGER,
        country_code TEXT,
        nhs_regional_ha_code TEXT,
        nhs_ha_code TEXT,
        admin_county_code TEXT,
        admin_district_code TEXT,
        admin_ward_code TEXT
    );

    CREATE VIRTUAL TABLE postcodes_rtree USING rtree(
        id,
        minX, maxX,
        minY, maxY
    );

    CREATE INDEX idx_postcodes_easting_northing ON postcodes(easting, northing);
    CREATE INDEX idx_postcodes_admin_district ON postcodes(admin_district_code);
"""

_COLUMNS = (
    "p.postcode, p.positional_quality, p.easting, p.northing, p.country_code, "
    "p.nhs_regional_ha_code, p.nhs_ha_code, p.admin_county_code, "
    "p.admin_district_code, p.admin_ward_code"
)


def normalize_postcode(postcode: str) -> str:
    """Uppercase with a single space before the inward code ("aa11aa" -> "AA1 1AA")."""
    compact = "".join(postcode.split()).upper()
    if len(compact) <= 3:
        return compact
    return f"{compact[:-3]} {compact[-3:]}"


def resolve_db_path(db_path: str | Path | None = None) -> Path:
    return Path(db_path or settings.postcode_db_path).resolve()


def _map_row(row: sqlite3.Row) -> PostcodeRecord:
    return PostcodeRecord(
        postcode=row["postcode"],
        positional_quality=row["positional_quality"] or 0,
        easting=row["easting"],
        northing=row["northing"],
        country_code=row["country_code"] or "",
        admin_county_code=row["admin_county_code"] or "",
        admin_district_code=row["admin_district_code"] or "",
        admin_ward_code=row["admin_ward_code"] or "",
        nhs_regional_ha_code=row["nhs_regional_ha_code"] or "",
        nhs_ha_code=row["nhs_ha_code"] or "",
    )


class PostcodeStore:
    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).resolve()
        if not self.db_path.exists():
            raise ReferenceDataError(
                f"Postcode database not found at {self.db_path}. "
                'Run "python -m property_prices.data.build_postcodes" to generate it.'
            )
        self._conn = sqlite3.connect(
            f"{self.db_path.as_uri()}?mode=ro", uri=True, check_same_thread=False
        )
        self._conn.row_factory = sqlite3.Row

    def close(self) -> None:
        self._conn.close()

    def get(self, postcode: str) -> PostcodeRecord | None:
        """Fetch one record by postcode (normalised before lookup)."""
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM postcodes p WHERE p.postcode = ?",
            (normalize_postcode(postcode),),
        ).fetchone()
        return _map_row(row) if row else None

    def within_box(
        self,
        easting: float,
        northing: float,
        radius: float,
        admin_district: str | None = None,
        max_rows: int = DEFAULT_MAX_ROWS,
    ) -> list[PostcodeRecord]:
        """Records inside the square of side 2*radius centred on the point.

        Rows come back in index order; callers compute true distances.
        """
        sql = (
            f"SELECT {_COLUMNS} FROM postcodes_rtree r "
            "JOIN postcodes p ON p.rowid = r.id "
            "WHERE r.maxX >= ? AND r.minX <= ? AND r.maxY >= ? AND r.minY <= ?"
        )
        params: list = [easting - radius, easting + radius, northing - radius, northing + radius]
        if admin_district:
            sql += " AND p.admin_district_code = ?"
            params.append(admin_district)
        sql += " LIMIT ?"
        params.append(max_rows)

        return [_map_row(row) for row in self._conn.execute(sql, params).fetchall()]


_store: PostcodeStore | None = None
_store_path: Path | None = None
_store_lock = threading.Lock()


def get_postcode_store(db_path: str | Path | None = None) -> PostcodeStore:
    """Get the shared read-only store, reopening it only if the path changes."""
    global _store, _store_path
    resolved = resolve_db_path(db_path)
    with _store_lock:
        if _store is not None and _store_path == resolved:
            return _store
        store = PostcodeStore(resolved)
        if _store is not None:
            _store.close()
        _store, _store_path = store, resolved
        logger.info("Opened postcode database at %s", resolved)
        return _store
