"""Session-keyed storage for optimization results."""

import logging
import threading
from typing import Dict, List, Optional

from src.core.exceptions import PortfolioNotFoundError
from src.sandbox.models import OptimizationResult, StoredPortfolio

logger = logging.getLogger(__name__)


class SessionStore:
    """
    In-memory store holding the latest optimization per session.

    Nothing survives a process restart. Writes and reads are guarded by a
    lock so request handlers on different threads can share one store.
    """

    def __init__(self):
        self._portfolios: Dict[str, StoredPortfolio] = {}
        self._lock = threading.Lock()

    def save(
        self,
        session_id: str,
        result: OptimizationResult,
        amount: float,
        risk_tolerance: int,
    ) -> StoredPortfolio:
        """
        Store a result, replacing any previous one for the session.

        Args:
            session_id: Session key
            result: Optimization result to keep
            amount: Amount the result was computed for
            risk_tolerance: Tolerance the result was computed for

        Returns:
            The stored record
        """
        record = StoredPortfolio(result=result, amount=amount, risk_tolerance=risk_tolerance)
        with self._lock:
            self._portfolios[session_id] = record

        logger.info(f"Saved portfolio for session: {session_id}")
        return record

    def get(self, session_id: str) -> Optional[StoredPortfolio]:
        with self._lock:
            return self._portfolios.get(session_id)

    def load(self, session_id: str) -> StoredPortfolio:
        """
        Get the stored record for a session.

        Raises:
            PortfolioNotFoundError: If the session has no stored result
        """
        record = self.get(session_id)
        if record is None:
            logger.warning(f"Portfolio not found: {session_id}")
            raise PortfolioNotFoundError(session_id)
        return record

    def delete(self, session_id: str) -> bool:
        """Remove a session's record. Returns False if there was none."""
        with self._lock:
            removed = self._portfolios.pop(session_id, None)

        if removed is not None:
            logger.info(f"Deleted portfolio for session: {session_id}")
            return True
        return False

    def list_sessions(self) -> List[str]:
        with self._lock:
            return list(self._portfolios)

    def __len__(self) -> int:
        with self._lock:
            return len(self._portfolios)
