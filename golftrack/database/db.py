"""
SQLite round store for GolfTrack.

Keeps rounds, their scorecards and tracked shots available offline, and
imports/exports the JSON document the web client kept in local storage.
Database file: ~/.golftrack/golftrack.db
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from golftrack.models.round import Round, ScoreEntry
from golftrack.models.shot import Coordinate, Lie, Shot, parse_timestamp
from golftrack.utils.config import Config
from golftrack.utils.constants import STORAGE_QUOTA_BYTES

logger = logging.getLogger(__name__)

SCHEMA_FILE = Path(__file__).parent / "schema.sql"


def _utc_text(ts: datetime) -> str:
    """ISO text in UTC, so stored timestamps sort chronologically."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat()


class Database:
    """SQLite database wrapper for GolfTrack data persistence."""

    def __init__(self, db_path: Optional[Path] = None,
                 config: Optional[Config] = None):
        if db_path is None:
            db_path = (config or Config.instance()).get_db_path()
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None
        self._init_db()

    def _init_db(self):
        """Initialize database connection and create tables."""
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA foreign_keys=ON")

        # Create tables from schema
        schema = SCHEMA_FILE.read_text()
        self.conn.executescript(schema)
        self.conn.commit()
        logger.info(f"Database initialized at {self.db_path}")

    def close(self):
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    # =========================================================================
    # Rounds
    # =========================================================================

    def save_round(self, round_: Round):
        """Insert or replace a round together with its shots and scores."""
        with self.conn:
            self.conn.execute("""
                INSERT INTO rounds (id, course_id, course_name, date, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    course_id = excluded.course_id,
                    course_name = excluded.course_name,
                    date = excluded.date,
                    updated_at = excluded.updated_at
            """, (
                round_.id, round_.course_id, round_.course_name,
                _utc_text(round_.date),
                datetime.now(timezone.utc).isoformat(),
            ))

            self.conn.execute("DELETE FROM shots WHERE round_id = ?", (round_.id,))
            self.conn.executemany("""
                INSERT INTO shots (
                    id, round_id, hole_number, shot_number,
                    latitude, longitude, club, distance, lie, timestamp
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, [
                (
                    s.id, round_.id, s.hole_number, s.shot_number,
                    s.coordinates.latitude, s.coordinates.longitude,
                    s.club, s.distance, s.lie.value, _utc_text(s.timestamp),
                )
                for s in round_.shots
            ])

            self.conn.execute("DELETE FROM scores WHERE round_id = ?", (round_.id,))
            self.conn.executemany("""
                INSERT INTO scores (
                    round_id, hole_number, par, score, putts,
                    fairway_hit, green_in_regulation
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """, [
                (
                    round_.id, e.hole_number, e.par, e.score, e.putts,
                    int(e.fairway_hit), int(e.green_in_regulation),
                )
                for e in round_.scores
            ])
        logger.info(
            f"Round saved: id={round_.id} "
            f"({len(round_.shots)} shots, {len(round_.scores)} scores)"
        )

    def get_round(self, round_id: str) -> Optional[Round]:
        """Load a round by id, or None if it doesn't exist."""
        row = self.conn.execute(
            "SELECT * FROM rounds WHERE id = ?", (round_id,)
        ).fetchone()
        if row is None:
            return None
        return self._row_to_round(row)

    def get_rounds(self, limit: Optional[int] = None) -> list[Round]:
        """All rounds, most recent first."""
        query = "SELECT * FROM rounds ORDER BY date DESC"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)
        rows = self.conn.execute(query, params).fetchall()
        return [self._row_to_round(r) for r in rows]

    def delete_round(self, round_id: str) -> bool:
        """Delete a round; returns False if it didn't exist."""
        with self.conn:
            cur = self.conn.execute("DELETE FROM rounds WHERE id = ?", (round_id,))
        return cur.rowcount > 0

    def clear(self):
        """Remove every stored round."""
        with self.conn:
            self.conn.execute("DELETE FROM rounds")
        logger.info("Offline data cleared")

    def _row_to_round(self, row: sqlite3.Row) -> Round:
        return Round(
            id=row["id"],
            course_id=row["course_id"],
            course_name=row["course_name"],
            date=parse_timestamp(row["date"]),
            shots=self._get_round_shots(row["id"]),
            scores=self._get_round_scores(row["id"]),
        )

    # =========================================================================
    # Shots and scores
    # =========================================================================

    def _get_round_shots(self, round_id: str) -> list[Shot]:
        rows = self.conn.execute(
            "SELECT * FROM shots WHERE round_id = ? "
            "ORDER BY hole_number, shot_number",
            (round_id,),
        ).fetchall()
        return [self._row_to_shot(r) for r in rows]

    def _get_round_scores(self, round_id: str) -> list[ScoreEntry]:
        rows = self.conn.execute(
            "SELECT * FROM scores WHERE round_id = ? ORDER BY hole_number",
            (round_id,),
        ).fetchall()
        return [
            ScoreEntry(
                hole_number=r["hole_number"],
                par=r["par"],
                score=r["score"],
                putts=r["putts"],
                fairway_hit=bool(r["fairway_hit"]),
                green_in_regulation=bool(r["green_in_regulation"]),
            )
            for r in rows
        ]

    @staticmethod
    def _row_to_shot(r: sqlite3.Row) -> Shot:
        return Shot(
            id=r["id"],
            hole_number=r["hole_number"],
            shot_number=r["shot_number"],
            coordinates=Coordinate(r["latitude"], r["longitude"]),
            club=r["club"],
            distance=r["distance"],
            lie=Lie(r["lie"]),
            timestamp=parse_timestamp(r["timestamp"]),
        )

    def get_all_shots(self) -> list[Shot]:
        """Every stored shot across all rounds, oldest first."""
        rows = self.conn.execute(
            "SELECT * FROM shots ORDER BY timestamp"
        ).fetchall()
        return [self._row_to_shot(r) for r in rows]

    # =========================================================================
    # Offline data import/export
    # =========================================================================

    def storage_usage(self) -> tuple[int, int]:
        """(bytes used, quota estimate) for the offline indicator."""
        page_count = self.conn.execute("PRAGMA page_count").fetchone()[0]
        page_size = self.conn.execute("PRAGMA page_size").fetchone()[0]
        return page_count * page_size, STORAGE_QUOTA_BYTES

    def export_json(self, path: Path) -> int:
        """Write all rounds to `path` in the offline-data JSON shape.

        Returns:
            Number of rounds written.
        """
        rounds = self.get_rounds()
        data = {
            "rounds": [r.to_dict() for r in rounds],
            "lastSync": datetime.now(timezone.utc).isoformat(),
        }
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        logger.info(f"Exported {len(rounds)} rounds to {path}")
        return len(rounds)

    def import_json(self, path: Path) -> int:
        """Load rounds from an offline-data JSON file, replacing same-id rounds.

        Returns:
            Number of rounds imported.

        Raises:
            ValueError: If the document or a round in it is malformed.
        """
        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path} is not valid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("rounds"), list):
            raise ValueError(f"{path} is missing required field 'rounds'")

        rounds = [Round.from_dict(r) for r in data["rounds"]]
        for round_ in rounds:
            self.save_round(round_)
        logger.info(f"Imported {len(rounds)} rounds from {path}")
        return len(rounds)
