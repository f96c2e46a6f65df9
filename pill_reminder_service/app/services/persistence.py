# app/services/persistence.py
import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import List, Optional, Tuple, Union

from app.db.db_config import get_sqlite_connection
from app.schemas.models import Dose, Medication

logger = logging.getLogger(__name__)

MEDICATIONS_KEY = "pill-reminder-medications"
DOSES_KEY = "pill-reminder-doses"

SEED_MEDICATIONS: List[Medication] = [
    Medication(id="1", name="Lisinopril", dosage="10mg", frequency=24, start_time="08:00",
               observations="Take on a full stomach."),
    Medication(id="2", name="Metformin", dosage="500mg", frequency=12, start_time="09:00"),
    Medication(id="3", name="Amoxicillin", dosage="250mg", frequency=8, start_time="07:00",
               observations="Avoid dairy for 1 hour after taking."),
]

def seed_medications() -> List[Medication]:
    return [m.model_copy() for m in SEED_MEDICATIONS]

class KeyValueStore:
    """Named text blobs in a single sqlite table."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._lock = threading.Lock()
        self._conn = get_sqlite_connection(path)
        self._conn.execute("CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)")
        self._conn.commit()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

class PersistenceAdapter:
    """
    Loads/saves the medication and dose collections as two JSON blobs.
    Dose timestamps travel as ISO-8601 strings.
    """

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def load(self) -> Tuple[List[Medication], List[Dose]]:
        """
        Returns (medications, doses). Missing or unreadable data falls back to
        the seed medications with no stored doses.
        """
        try:
            raw_meds = self.kv.get(MEDICATIONS_KEY)
            raw_doses = self.kv.get(DOSES_KEY)
            if raw_meds is None:
                logger.info("No stored medications, using seed set")
                return seed_medications(), []

            meds = [Medication.model_validate(m) for m in json.loads(raw_meds)]
            doses = [Dose.model_validate(d) for d in json.loads(raw_doses)] if raw_doses else []
            return meds, doses
        except (sqlite3.Error, ValueError, TypeError) as e:
            # pydantic.ValidationError and json.JSONDecodeError are ValueErrors
            logger.error("Failed to load state, falling back to seed medications: %s", e)
            return seed_medications(), []

    def save(self, medications: List[Medication], doses: List[Dose]) -> bool:
        try:
            self.kv.set(MEDICATIONS_KEY, json.dumps([m.model_dump(mode="json") for m in medications]))
            self.kv.set(DOSES_KEY, json.dumps([d.model_dump(mode="json") for d in doses]))
            return True
        except (sqlite3.Error, TypeError, ValueError) as e:
            logger.error("Failed to save state: %s", e)
            return False
