"""
Transaction handling for the JSON document store.

All records live in a single JSON file. A transaction holds the store lock
from begin until it is committed or rolled back, and works on a private copy
of the document. Commit writes the copy back atomically; rollback drops it.
"""

import json
import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..errors import TxError

logger = logging.getLogger(__name__)

TABLES = ("phone_certifications", "parent_auths", "reclaimed_uuids")


def empty_document() -> dict:
    return {
        "phone_certifications": {},
        "parent_auths": {},
        "reclaimed_uuids": []
    }


@dataclass
class TxOptions:
    """Options accepted by begin_tx."""
    read_only: bool = False


@dataclass
class TxContext:
    """An open transaction on the JSON document."""
    data: dict = field(repr=False)
    read_only: bool = False
    closed: bool = False

    def table(self, name: str):
        """Return a table of the working copy, failing if the tx is closed."""
        if self.closed:
            raise TxError("transaction is already closed")
        if name not in TABLES:
            raise TxError(f"unknown table '{name}'")
        return self.data[name]


class JSONTxHandler:
    """
    Begins, commits and rolls back transactions on a JSON file.

    Transactions are serialized through one lock, so a read-modify-write
    inside a transaction never interleaves with another transaction.
    """

    def __init__(self, file_path: Path, lock_timeout: float = 10.0):
        """
        Initialize transaction handler.

        Args:
            file_path: Path to the JSON document
            lock_timeout: Seconds to wait for the store lock in begin_tx
        """
        self.file_path = Path(file_path)
        self.lock_timeout = lock_timeout
        self._lock = threading.Lock()

    def _load(self) -> dict:
        """Load the document, returning an empty one if the file is missing."""
        try:
            with open(self.file_path, "r") as f:
                data = json.load(f)
        except FileNotFoundError:
            return empty_document()
        except json.JSONDecodeError as e:
            raise TxError(f"store file {self.file_path} is not valid JSON: {e}") from e

        document = empty_document()
        document.update(data)
        return document

    def _save(self, data: dict):
        """Write the document through a temp file so readers never see a partial write."""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.file_path)

    def begin_tx(self, opts: Optional[TxOptions] = None) -> TxContext:
        """
        Start a transaction.

        Args:
            opts: Transaction options (default: read-write)

        Returns:
            Open TxContext

        Raises:
            TxError: If the lock times out or the document can't be loaded
        """
        opts = opts or TxOptions()

        if not self._lock.acquire(timeout=self.lock_timeout):
            raise TxError(f"timed out after {self.lock_timeout}s waiting for store lock")

        try:
            data = self._load()
        except Exception:
            self._lock.release()
            raise

        return TxContext(data=data, read_only=opts.read_only)

    def commit(self, tx: TxContext):
        """
        Commit a transaction, writing its working copy to disk.

        Raises:
            TxError: If the transaction is already closed or the write fails
        """
        if tx.closed:
            raise TxError("transaction is already closed")

        try:
            if not tx.read_only:
                self._save(tx.data)
        except OSError as e:
            raise TxError(f"failed to write store file: {e}") from e
        finally:
            tx.closed = True
            self._lock.release()

        logger.debug(f"Committed transaction on {self.file_path}")

    def rollback(self, tx: TxContext):
        """
        Roll back a transaction, discarding its working copy.

        Raises:
            TxError: If the transaction is already closed
        """
        if tx.closed:
            raise TxError("transaction is already closed")

        tx.closed = True
        self._lock.release()
        logger.debug(f"Rolled back transaction on {self.file_path}")
