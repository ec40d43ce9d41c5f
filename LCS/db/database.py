"""
Document Store Configuration and Access
Local key-value storage of whole JSON documents for the Loan Collection System
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional
import logging

from utils.exceptions import StorageException

# Configure logging
logging.basicConfig(level=os.getenv('LCS_LOG_LEVEL', 'INFO').upper())
logger = logging.getLogger(__name__)

# Fixed document keys
AGENTS_KEY = 'agents'
LOANS_KEY = 'loans'
CURRENT_USER_KEY = 'loggedInUser'

class StorageConfig:
    """Document store configuration management"""

    def __init__(self, data_dir: str = None):
        self.config = {
            'data_dir': data_dir or os.getenv('LCS_DATA_DIR', 'data'),
            'encoding': 'utf-8',
            'indent': int(os.getenv('LCS_JSON_INDENT', 2)),
        }

    @property
    def data_dir(self) -> Path:
        return Path(self.config['data_dir'])

class DocumentStore:
    """Whole-document get/set/remove over one JSON file per key.

    There are no transactions: every ``set`` replaces the stored document,
    going through a temporary file so a reader never sees half a write.
    """

    def __init__(self, config: StorageConfig = None):
        self.storage_config = config or StorageConfig()

    def _path(self, key: str) -> Path:
        return self.storage_config.data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        """Return the raw stored document, or None if absent"""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding=self.storage_config.config['encoding'])
        except OSError as e:
            logger.error(f"Error reading document '{key}': {e}")
            return None

    def get_json(self, key: str) -> Any:
        """Return the decoded document; raises ValueError if it is malformed"""
        raw = self.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        """Serialize and store a whole document"""
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(value, indent=self.storage_config.config['indent'], ensure_ascii=False)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding=self.storage_config.config['encoding']) as tmp:
                    tmp.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
            logger.debug(f"Stored document '{key}' ({len(payload)} bytes)")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error storing document '{key}': {e}")
            raise StorageException(f"Failed to store {key}: {str(e)}")

    def remove(self, key: str) -> None:
        """Delete a document if present"""
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Error removing document '{key}': {e}")
            raise StorageException(f"Failed to remove {key}: {str(e)}")

    def test_connection(self) -> bool:
        """Check that the data directory is usable"""
        try:
            self.storage_config.data_dir.mkdir(parents=True, exist_ok=True)
            return os.access(self.storage_config.data_dir, os.W_OK)
        except OSError as e:
            logger.error(f"Document store check failed: {e}")
            return False

# Global document store instance
document_store = DocumentStore()
