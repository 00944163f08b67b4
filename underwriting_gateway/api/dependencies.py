"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from underwriting_gateway.domain.recorder import DecisionRecorder, DecisionStore, InMemoryDecisionStore
from underwriting_gateway.infrastructure.database.repositories import DecisionRepository
from underwriting_gateway.infrastructure.database.session import get_db

# Shared across requests when STORE_BACKEND=memory
memory_store = InMemoryDecisionStore()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_decision_store(db: Session = Depends(get_db)) -> DecisionStore:
    """Provide the SQL history store"""
    return DecisionRepository(db)


def get_memory_store() -> DecisionStore:
    """Provide the process-wide in-memory store; replaces get_decision_store for the memory backend"""
    return memory_store


def get_recorder(store: DecisionStore = Depends(get_decision_store)) -> DecisionRecorder:
    """Provide a decision recorder bound to the history store"""
    return DecisionRecorder(store)
