"""FIGI record data model."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

# Python attribute name -> JSON key in API responses.
_RECORD_KEYS: dict[str, str] = {
    "figi": "figi",
    "security_type": "securityType",
    "market_sector": "marketSector",
    "ticker": "ticker",
    "name": "name",
    "exch_code": "exchCode",
    "share_class_figi": "shareClassFIGI",
    "composite_figi": "compositeFIGI",
    "security_type2": "securityType2",
    "security_description": "securityDescription",
    "metadata": "metadata",
}


@dataclass(frozen=True)
class FigiRecord:
    """One instrument returned by mapping, search or filter.

    Descriptive fields are kept as the strings the API sent; the server
    may return values newer than the request-side enums.

    Attributes:
        figi: Financial Instrument Global Identifier.
        security_type: Detailed security type.
        market_sector: Market sector description.
        ticker: Ticker symbol.
        name: Instrument name.
        exch_code: Exchange code.
        share_class_figi: Share-class level FIGI.
        composite_figi: Composite FIGI.
        security_type2: Broad security type.
        security_description: Free-text description.
        metadata: Fallback text when no descriptive fields are available.
    """

    figi: str
    security_type: str | None = None
    market_sector: str | None = None
    ticker: str | None = None
    name: str | None = None
    exch_code: str | None = None
    share_class_figi: str | None = None
    composite_figi: str | None = None
    security_type2: str | None = None
    security_description: str | None = None
    metadata: str | None = None

    @property
    def has_composite_figi(self) -> bool:
        return self.composite_figi is not None

    @property
    def has_share_class_figi(self) -> bool:
        return self.share_class_figi is not None

    @property
    def display_name(self) -> str:
        """Name, else ticker, else the FIGI itself."""
        return self.name or self.ticker or self.figi

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                out[_RECORD_KEYS[f.name]] = value
        return out

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> FigiRecord:
        """Build a record from a response object.

        Raises:
            ValueError: ``figi`` is missing or not a string.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"expected an object, got {type(payload).__name__}")
        figi = payload.get("figi")
        if not isinstance(figi, str) or not figi:
            raise ValueError("record is missing 'figi'")
        values: dict[str, Any] = {"figi": figi}
        for attr, key in _RECORD_KEYS.items():
            if attr == "figi":
                continue
            raw = payload.get(key)
            if raw is not None:
                values[attr] = str(raw)
        return cls(**values)
