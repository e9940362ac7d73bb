"""Local JSON file repository for ledger snapshots."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from nutriflow.services.snapshots import SnapshotRepository

_logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass
class JsonFileSnapshotRepository(SnapshotRepository):
    """Stores each snapshot key as a JSON file in a directory."""

    root: Path

    def load(self, key: str) -> str | None:
        """Return the file contents for a key, if the file exists and decodes."""
        path = self._path_for(key)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            _logger.warning("Snapshot file %s is not valid UTF-8; ignoring it", path)
            return None

    def save(self, key: str, payload: str) -> None:
        """Write the payload atomically, replacing any previous file."""
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(path)

    def _path_for(self, key: str) -> Path:
        return self.root / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"
