# on-disk JSON documents
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from .errors import MalformedDocument, StorageError

logger = logging.getLogger(__name__)


class JsonDocumentStore:
    """
    Flat JSON documents kept in one data directory, one file per key space.

    Every read and write goes to disk; nothing is cached. A document that does
    not exist yet is created with the caller's default on first read.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def path(self, name: str) -> Path:
        return self.data_dir / name

    def ensure_data_dir(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create data directory {self.data_dir}: {exc}") from exc

    def read(self, name: str, default: Dict[str, Any]) -> Dict[str, Any]:
        self.ensure_data_dir()
        path = self.path(name)

        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("Creating %s", path)
            self.write(name, default)
            return default
        except OSError as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc

        try:
            data = json.loads(content)
        except ValueError as exc:
            raise MalformedDocument(f"{path} is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise MalformedDocument(f"{path} does not contain a JSON object")
        return data

    def write(self, name: str, data: Dict[str, Any]) -> None:
        """
        Replace the whole document. The new content is written to a temporary
        file next to it and moved into place, so readers never see a partial file.
        """
        self.ensure_data_dir()
        path = self.path(name)

        tmp = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", delete=False, dir=self.data_dir, suffix=".tmp"
            ) as tf:
                tmp = tf.name
                json.dump(data, tf, indent=2, ensure_ascii=False)
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp is not None:
                try:
                    os.unlink(tmp)
                except FileNotFoundError:
                    pass
            raise StorageError(f"Cannot write {path}: {exc}") from exc
