"""Build the postcode SQLite database from Ordnance Survey Code-Point Open CSVs.

Usage:
    python -m property_prices.data.build_postcodes
    python -m property_prices.data.build_postcodes --csv-dir codepo_gb/Data/CSV --db data/postcodes.sqlite

Code-Point Open CSV columns (no header):
    postcode, positional_quality, easting, northing, country_code,
    nhs_regional_ha_code, nhs_ha_code, admin_county_code,
    admin_district_code, admin_ward_code
"""

import argparse
import csv
import logging
import sqlite3
import sys
import time
from pathlib import Path

from property_prices.config import settings
from property_prices.data.postcodes import SCHEMA, normalize_postcode
from property_prices.errors import ReferenceDataError

logger = logging.getLogger(__name__)

CODEPO_DOWNLOAD_URL = (
    "https://api.os.uk/downloads/v1/products/CodePointOpen/downloads?area=GB&format=CSV&redirect"
)
MIN_COLUMNS = 10


def _int(value: str) -> int:
    try:
        return int(value or 0)
    except ValueError:
        return 0


def create_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(
        "DROP TABLE IF EXISTS postcodes;\nDROP TABLE IF EXISTS postcodes_rtree;\n" + SCHEMA
    )


def insert_postcode(conn: sqlite3.Connection, cols: list[str]) -> None:
    """Insert one Code-Point Open row and its zero-area R*Tree entry.

    Raises ValueError when the easting or northing is not an integer.
    """
    postcode = normalize_postcode(cols[0])
    easting = int(cols[2])
    northing = int(cols[3])
    cur = conn.execute(
        "INSERT OR REPLACE INTO postcodes ("
        "postcode, positional_quality, easting, northing, country_code, "
        "nhs_regional_ha_code, nhs_ha_code, admin_county_code, "
        "admin_district_code, admin_ward_code"
        ") VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        (postcode, _int(cols[1]), easting, northing, *[c or "" for c in cols[4:10]]),
    )
    conn.execute(
        "INSERT OR REPLACE INTO postcodes_rtree (id, minX, maxX, minY, maxY) VALUES (?, ?, ?, ?, ?)",
        (cur.lastrowid, easting, easting, northing, northing),
    )


def build_database(csv_dir: Path, db_path: Path) -> int:
    """Recreate the postcode tables from every *.csv in csv_dir. Returns rows loaded."""
    if not csv_dir.is_dir():
        raise ReferenceDataError(
            f"CSV directory not found: {csv_dir}. Download Code-Point Open from "
            f"{CODEPO_DOWNLOAD_URL} and extract it so that Data/CSV/*.csv exists."
        )
    db_path.parent.mkdir(parents=True, exist_ok=True)

    started = time.monotonic()
    total = 0
    conn = sqlite3.connect(db_path)
    try:
        conn.execute("PRAGMA synchronous = NORMAL")
        create_schema(conn)

        with conn:
            for csv_path in sorted(csv_dir.glob("*.csv")):
                logger.info("Ingesting %s", csv_path.name)
                with csv_path.open(newline="", encoding="utf-8") as f:
                    for cols in csv.reader(f):
                        if not cols:
                            continue
                        if len(cols) < MIN_COLUMNS:
                            logger.warning("Skipping malformed line in %s: %s", csv_path.name, cols)
                            continue
                        if not cols[0].strip():
                            continue
                        try:
                            insert_postcode(conn, cols)
                        except ValueError:
                            logger.warning(
                                "Skipping line with invalid coordinates in %s: %s", csv_path.name, cols
                            )
                            continue
                        total += 1
    finally:
        conn.close()

    logger.info(
        "Loaded %d postcodes into %s in %.1fs", total, db_path, time.monotonic() - started
    )
    return total


def main() -> None:
    parser = argparse.ArgumentParser(description="Build the postcode SQLite database")
    parser.add_argument("--csv-dir", default=settings.codepo_csv_dir, help="Code-Point Open Data/CSV directory")
    parser.add_argument("--db", default=settings.postcode_db_path, help="Output SQLite path")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s - %(name)s - %(asctime)s - %(message)s",
    )
    try:
        build_database(Path(args.csv_dir), Path(args.db))
    except ReferenceDataError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
