"""
Storage Collaborators

Interfaces the parser expects from the storage layer, plus an in-memory
implementation used by the API and tests.
"""

import logging
import threading
from typing import Protocol

from .models import Transaction

logger = logging.getLogger(__name__)


class MerchantHistory(Protocol):
    """Source of merchant names already stored."""

    def get_all_unique_merchants(self) -> list[str]:
        ...


class TransactionStore(MerchantHistory, Protocol):
    """Storage operations used by the capture worker."""

    def is_duplicate(self, raw_text_hash: str) -> bool:
        ...

    def insert_transaction(self, transaction: Transaction) -> int:
        ...

    def insert_unverified(self, transaction: Transaction) -> int:
        ...


class InMemoryTransactionStore:
    """Process-local store keyed by insertion order."""

    def __init__(self):
        self._lock = threading.Lock()
        self._seen_hashes: set[str] = set()
        self.transactions: dict[int, Transaction] = {}
        self.unverified: dict[int, Transaction] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    def _remember_hash(self, transaction: Transaction) -> None:
        if transaction.raw_text_hash:
            self._seen_hashes.add(transaction.raw_text_hash)

    def is_duplicate(self, raw_text_hash: str) -> bool:
        with self._lock:
            return raw_text_hash in self._seen_hashes

    def insert_transaction(self, transaction: Transaction) -> int:
        with self._lock:
            new_id = self._allocate_id()
            self.transactions[new_id] = transaction
            self._remember_hash(transaction)
        logger.debug(f"Stored transaction {new_id}")
        return new_id

    def insert_unverified(self, transaction: Transaction) -> int:
        with self._lock:
            new_id = self._allocate_id()
            self.unverified[new_id] = transaction
            self._remember_hash(transaction)
        logger.debug(f"Stored unverified transaction {new_id}")
        return new_id

    def get_all_unique_merchants(self) -> list[str]:
        with self._lock:
            merchants = [t.merchant for t in self.transactions.values()]
        return list(dict.fromkeys(m for m in merchants if m))

    def reset(self) -> None:
        """Drop everything stored so far."""
        with self._lock:
            self._seen_hashes.clear()
            self.transactions.clear()
            self.unverified.clear()
            self._next_id = 1
