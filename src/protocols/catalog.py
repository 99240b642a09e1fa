"""Protocol catalog: read-only reference data and queries over it."""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from src.core.models import LiquidityTier, Protocol

logger = logging.getLogger(__name__)

# Built-in catalog
# Format: name -> {apy (percent), tvl (USD), risk_score (1-10), liquidity tier}
DEFAULT_PROTOCOLS: Dict[str, Dict[str, Any]] = {
    "CoreDAO Staking": {"apy": 12.8, "tvl": 125_000_000, "risk_score": 3, "liquidity": "high"},
    "Bitcoin Bridge": {"apy": 8.5, "tvl": 89_000_000, "risk_score": 2, "liquidity": "high"},
    "CORE-BTC LP": {"apy": 15.2, "tvl": 45_000_000, "risk_score": 7, "liquidity": "medium"},
    "Lightning Yield": {"apy": 6.8, "tvl": 210_000_000, "risk_score": 1, "liquidity": "very_high"},
    "Cross-Chain Pool": {"apy": 18.5, "tvl": 23_000_000, "risk_score": 9, "liquidity": "low"},
}


class ProtocolCatalog:
    """
    Immutable, ordered set of protocol records.

    Records are validated on construction and never modified afterwards;
    every query returns a fresh mapping so callers cannot reach into the
    catalog's own storage.
    """

    def __init__(self, protocols: Mapping[str, Protocol]):
        for name, protocol in protocols.items():
            if name != protocol.name:
                raise ValueError(f"Catalog key {name!r} does not match protocol name {protocol.name!r}")
        self._protocols = MappingProxyType(dict(protocols))

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]]) -> "ProtocolCatalog":
        """Build a catalog from raw name -> fields records."""
        return cls({name: Protocol.from_dict(name, fields) for name, fields in data.items()})

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "ProtocolCatalog":
        """Load a catalog from a JSON file shaped like DEFAULT_PROTOCOLS."""
        path = Path(path)
        with open(path, "r") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError("Catalog file must contain a mapping of protocols")

        # Accept both {"protocols": {...}} and a bare mapping
        if "protocols" in data and isinstance(data["protocols"], dict):
            data = data["protocols"]

        catalog = cls.from_dict(data)
        logger.info(f"Loaded {len(catalog)} protocols from {path}")
        return catalog

    @classmethod
    def default(cls) -> "ProtocolCatalog":
        return cls.from_dict(DEFAULT_PROTOCOLS)

    @property
    def protocols(self) -> Mapping[str, Protocol]:
        """Read-only view of all records in catalog order."""
        return self._protocols

    def get(self, name: str) -> Optional[Protocol]:
        return self._protocols.get(name)

    def list_protocols(
        self,
        risk_max: Optional[int] = None,
        apy_min: Optional[float] = None,
        liquidity: Optional[Union[str, LiquidityTier]] = None,
    ) -> Dict[str, Protocol]:
        """
        Query the catalog.

        Args:
            risk_max: Keep protocols with risk_score <= risk_max
            apy_min: Keep protocols with apy >= apy_min
            liquidity: Keep protocols in exactly this liquidity tier

        Returns:
            New ordered dict of matching protocols
        """
        wanted = liquidity.value if isinstance(liquidity, LiquidityTier) else liquidity

        result = {}
        for name, protocol in self._protocols.items():
            if risk_max is not None and protocol.risk_score > risk_max:
                continue
            if apy_min is not None and protocol.apy < apy_min:
                continue
            if wanted is not None and protocol.liquidity.value != wanted:
                continue
            result[name] = protocol

        return result

    def __len__(self) -> int:
        return len(self._protocols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._protocols)

    def __contains__(self, name: object) -> bool:
        return name in self._protocols


def load_catalog(path: Optional[Path] = None) -> ProtocolCatalog:
    """Load the catalog from a JSON file, or the built-in records when no path is given."""
    if path is None:
        return ProtocolCatalog.default()
    return ProtocolCatalog.from_json(path)
