"""Request payload schemas validated before any computation runs."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from src.core.constants import MAX_RISK_TOLERANCE, MIN_RISK_TOLERANCE


class OptimizeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Amount to invest")
    risk_tolerance: int = Field(..., ge=MIN_RISK_TOLERANCE, le=MAX_RISK_TOLERANCE, description="1 (cautious) to 10 (aggressive)")
    preferences: Dict[str, Any] = Field(default_factory=dict, description="Reserved, currently unused")


class PositionInput(BaseModel):
    """One protocol position fed into a simulation; extra keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    amount: float = Field(..., ge=0, allow_inf_nan=False)
    apy: float = Field(..., allow_inf_nan=False)
    risk: float = Field(..., ge=0, le=10, allow_inf_nan=False)


class SimulateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    allocation: Dict[str, PositionInput] = Field(..., min_length=1)
    days: int = Field(default=30, ge=1)
