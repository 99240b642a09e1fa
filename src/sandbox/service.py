"""Service facade for the allocation sandbox.

Validates requests, runs the optimizer and simulator, and keeps the latest
optimization per session. Transport layers (HTTP, CLI) call into this.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from config.settings import Settings, get_settings
from src.core.constants import MAX_RISK_TOLERANCE, MIN_RISK_TOLERANCE
from src.core.exceptions import InternalError, SandboxError, ValidationError
from src.core.models import LiquidityTier, Protocol
from src.protocols.catalog import ProtocolCatalog, load_catalog
from src.sandbox.engine import PortfolioOptimizer, SimulationEngine
from src.sandbox.models import (
    OptimizationResult,
    OptimizeRequest,
    SimulateRequest,
    SimulationPosition,
    SimulationReport,
    StoredPortfolio,
)
from src.sandbox.persistence.storage import SessionStore
from src.sandbox.random_source import RandomSource, create_random_source

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)

RISK_TOLERANCE_MESSAGE = f"Risk tolerance must be between {MIN_RISK_TOLERANCE} and {MAX_RISK_TOLERANCE}"
ALLOCATION_MESSAGE = "Valid allocation object required"


class PortfolioService:
    """Entry point for optimize / simulate / list-protocols requests."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        catalog: Optional[ProtocolCatalog] = None,
        store: Optional[SessionStore] = None,
        random_source: Optional[RandomSource] = None,
    ):
        """Initialize the service.

        Args:
            settings: Application settings
            catalog: Protocol catalog (default: loaded from settings.catalog_path)
            store: Session store (default: a fresh in-memory store)
            random_source: Random source shared by optimizer and simulator
        """
        self.settings = settings or get_settings()
        self.catalog = catalog if catalog is not None else load_catalog(self.settings.catalog_path)
        self.store = store if store is not None else SessionStore()
        self.random_source = random_source or create_random_source(self.settings.random_seed)

        self.optimizer = PortfolioOptimizer(
            catalog=self.catalog,
            random_source=self.random_source,
            risk_free_rate=self.settings.risk_free_rate,
            rebalance_interval_days=self.settings.rebalance_interval_days,
        )
        self.simulator = SimulationEngine(self.random_source)

    @property
    def amount_message(self) -> str:
        return f"Amount must be at least ${self.settings.min_investment_amount:g}"

    def optimize(
        self,
        amount: Any,
        risk_tolerance: Any,
        preferences: Optional[Mapping[str, Any]] = None,
        session_id: Optional[str] = None,
    ) -> OptimizationResult:
        """
        Validate and run an optimization, storing the result for the session.

        Args:
            amount: Amount to invest (>= settings.min_investment_amount)
            risk_tolerance: Integer 1-10
            preferences: Accepted and ignored
            session_id: Session key (default: settings.default_session_id)

        Returns:
            OptimizationResult

        Raises:
            ValidationError: On invalid amount or risk tolerance
            InternalError: On any unexpected failure during optimization
        """
        request = self._parse(
            OptimizeRequest,
            {"amount": amount, "risk_tolerance": risk_tolerance, "preferences": preferences or {}},
            messages={"amount": self.amount_message, "risk_tolerance": RISK_TOLERANCE_MESSAGE},
        )
        if request.amount < self.settings.min_investment_amount:
            raise ValidationError(self.amount_message)

        try:
            result = self.optimizer.optimize(request.amount, request.risk_tolerance, request.preferences)
        except SandboxError:
            raise
        except Exception as e:
            logger.exception(f"Optimization error: {e}")
            raise InternalError("Internal server error during optimization") from e

        self.store.save(
            session_id or self.settings.default_session_id,
            result,
            amount=request.amount,
            risk_tolerance=request.risk_tolerance,
        )
        return result

    def get_portfolio(self, session_id: str) -> StoredPortfolio:
        """
        Get the latest stored optimization for a session.

        Raises:
            PortfolioNotFoundError: If the session has none
        """
        return self.store.load(session_id)

    def simulate(
        self,
        allocation: Union[OptimizationResult, Mapping[str, Any], None],
        days: Optional[int] = None,
        start_date: Optional[date] = None,
    ) -> SimulationReport:
        """
        Validate and run a simulation.

        Args:
            allocation: Protocol name -> {amount, apy, risk}. AllocationEntry
                values and whole OptimizationResults are accepted too.
            days: Horizon in days (default: settings.default_simulation_days)
            start_date: First simulated date (default: today)

        Returns:
            SimulationReport

        Raises:
            ValidationError: On a missing/malformed allocation or bad horizon
            InternalError: On any unexpected failure during simulation
        """
        if days is None:
            days = self.settings.default_simulation_days

        request = self._parse(
            SimulateRequest,
            {"allocation": self._allocation_payload(allocation), "days": days},
            messages={
                "allocation": ALLOCATION_MESSAGE,
                "days": f"Days must be between 1 and {self.settings.max_simulation_days}",
            },
        )
        if request.days > self.settings.max_simulation_days:
            raise ValidationError(f"Days must be between 1 and {self.settings.max_simulation_days}")

        positions = {
            name: SimulationPosition(amount=p.amount, apy=p.apy, risk=p.risk)
            for name, p in request.allocation.items()
        }

        try:
            days_out = self.simulator.simulate(positions, request.days, start_date=start_date)
        except Exception as e:
            logger.exception(f"Simulation error: {e}")
            raise InternalError("Internal server error during simulation") from e

        return SimulationReport(
            days=days_out,
            protocols=len(positions),
            generated_at=datetime.now(timezone.utc),
        )

    def list_protocols(
        self,
        risk_max: Optional[int] = None,
        apy_min: Optional[float] = None,
        liquidity: Optional[Union[str, LiquidityTier]] = None,
    ) -> Dict[str, Protocol]:
        """Query the catalog; see ProtocolCatalog.list_protocols."""
        return self.catalog.list_protocols(risk_max=risk_max, apy_min=apy_min, liquidity=liquidity)

    @staticmethod
    def _allocation_payload(allocation: Any) -> Any:
        """Turn result objects and entry objects into plain dicts for validation."""
        if isinstance(allocation, OptimizationResult):
            allocation = allocation.allocation
        if not isinstance(allocation, Mapping):
            return allocation

        payload = {}
        for name, position in allocation.items():
            if isinstance(position, Mapping):
                payload[name] = position
            elif hasattr(position, "amount"):
                payload[name] = {
                    "amount": position.amount,
                    "apy": getattr(position, "apy", None),
                    "risk": getattr(position, "risk", None),
                }
            else:
                payload[name] = position
        return payload

    @staticmethod
    def _parse(
        model: Type[RequestT],
        data: Dict[str, Any],
        messages: Dict[str, str],
    ) -> RequestT:
        """Validate a payload, mapping the first failing field to a readable message."""
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            errors = e.errors()
            field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else ""
            message = messages.get(field) or "; ".join(err["msg"] for err in errors)
            logger.debug(f"Rejected {model.__name__}: {errors}")
            raise ValidationError(message) from e
