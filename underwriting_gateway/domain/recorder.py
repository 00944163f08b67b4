"""Decision recording - assembles history entries and hands them to a store"""

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Protocol, Sequence, Tuple

from underwriting_gateway.domain.exceptions import StoreError
from underwriting_gateway.domain.models import (
    DecisionOutcome,
    DecisionRecord,
    LoanApplication,
    Metrics,
)
from underwriting_gateway.domain.policy import POLICY_VERSION


class DecisionStore(Protocol):
    """Append-only history of decision records"""

    def append(self, record: DecisionRecord) -> DecisionRecord:
        """Persist record atomically and return it with id and created_at set"""
        ...

    def list(self) -> Sequence[DecisionRecord]:
        """All records in append order"""
        ...


class InMemoryDecisionStore:
    """Process-local store; appends and reads are serialized by a lock"""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: List[DecisionRecord] = []

    def append(self, record: DecisionRecord) -> DecisionRecord:
        with self._lock:
            stored = replace(
                record,
                id=len(self._records) + 1,
                created_at=datetime.now(timezone.utc),
            )
            self._records.append(stored)
        return stored

    def list(self) -> Tuple[DecisionRecord, ...]:
        with self._lock:
            return tuple(self._records)


class DecisionRecorder:
    """Builds immutable decision records and serves them back in insertion order"""

    def __init__(self, store: DecisionStore):
        self.store = store

    def build(
        self,
        app: LoanApplication,
        metrics: Metrics,
        outcome: DecisionOutcome,
        reason: str,
        policy_version: str = POLICY_VERSION,
    ) -> DecisionRecord:
        return DecisionRecord(
            application=app,
            metrics=metrics,
            outcome=outcome,
            reason=reason,
            policy_version=policy_version,
        )

    def record(
        self,
        app: LoanApplication,
        metrics: Metrics,
        outcome: DecisionOutcome,
        reason: str,
        policy_version: str = POLICY_VERSION,
    ) -> DecisionRecord:
        """
        Build a record and append it to the store.

        Raises:
            StoreError: the decision was computed but could not be recorded
        """
        record = self.build(app, metrics, outcome, reason, policy_version)
        try:
            return self.store.append(record)
        except StoreError:
            raise
        except Exception as e:
            raise StoreError("append", repr(e)) from e

    def list(self) -> List[DecisionRecord]:
        """
        Fetch every record, most recent last.

        Raises:
            StoreError: history could not be read; never reported as empty
        """
        try:
            return list(self.store.list())
        except StoreError:
            raise
        except Exception as e:
            raise StoreError("list", repr(e)) from e
