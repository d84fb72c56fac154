"""Optional constraints shared by mapping, search and filter requests."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, TypeVar

from figiclient.errors import FigiValidationError
from figiclient.models.enums import (
    Currency,
    ExchCode,
    MarketSecDesc,
    MicCode,
    OptionType,
    SecurityType,
    SecurityType2,
    StateCode,
    coerce_enum,
)

NumberRange = tuple[float | None, float | None]
DateRange = tuple[date | None, date | None]

# Python attribute name -> wire (camelCase) key.
WIRE_NAMES: dict[str, str] = {
    "exch_code": "exchCode",
    "mic_code": "micCode",
    "currency": "currency",
    "market_sec_des": "marketSecDes",
    "security_type": "securityType",
    "security_type2": "securityType2",
    "include_unlisted_equities": "includeUnlistedEquities",
    "option_type": "optionType",
    "strike": "strike",
    "contract_size": "contractSize",
    "coupon": "coupon",
    "expiration": "expiration",
    "maturity": "maturity",
    "state_code": "stateCode",
}
FIELD_NAMES: dict[str, str] = {wire: name for name, wire in WIRE_NAMES.items()}

ENUM_FIELDS: dict[str, type] = {
    "exch_code": ExchCode,
    "mic_code": MicCode,
    "currency": Currency,
    "market_sec_des": MarketSecDesc,
    "security_type": SecurityType,
    "security_type2": SecurityType2,
    "option_type": OptionType,
    "state_code": StateCode,
}
NUMBER_RANGES = frozenset({"strike", "contract_size", "coupon"})
DATE_RANGES = frozenset({"expiration", "maturity"})


@dataclass(frozen=True)
class FilterSet:
    """Bag of independently optional filter constraints.

    Every field defaults to ``None`` (unset). Intervals are
    ``(lower, upper)`` pairs where either bound may be ``None``.

    Attributes:
        exch_code: Exchange code; mutually exclusive with ``mic_code``.
        mic_code: Market identifier code; mutually exclusive with ``exch_code``.
        currency: Trading currency.
        market_sec_des: Market sector description.
        security_type: Detailed security type.
        security_type2: Broad security type; Option/Warrant need
            ``expiration``, Pool needs ``maturity``.
        include_unlisted_equities: Include unlisted equities in results.
        option_type: Call or Put.
        strike: Strike price interval.
        contract_size: Contract size interval.
        coupon: Coupon interval.
        expiration: Expiration date interval (at most one year wide).
        maturity: Maturity date interval (at most one year wide).
        state_code: State / province code.
    """

    exch_code: ExchCode | None = None
    mic_code: MicCode | None = None
    currency: Currency | None = None
    market_sec_des: MarketSecDesc | None = None
    security_type: SecurityType | None = None
    security_type2: SecurityType2 | None = None
    include_unlisted_equities: bool | None = None
    option_type: OptionType | None = None
    strike: NumberRange | None = None
    contract_size: NumberRange | None = None
    coupon: NumberRange | None = None
    expiration: DateRange | None = None
    maturity: DateRange | None = None
    state_code: StateCode | None = None

    def __post_init__(self) -> None:
        # Raw wire values and datetimes passed to the constructor are
        # normalised the same way the builders normalise them.
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                object.__setattr__(self, f.name, _coerce_field(f.name, value))

    def is_empty(self) -> bool:
        """True if no field is set."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def validate(self) -> None:
        """Raise ``FigiValidationError`` if the filters are inconsistent."""
        from figiclient.validation import validate_filters

        validate_filters(self)

    def to_wire(self) -> dict[str, Any]:
        """Return the camelCase JSON fields, omitting unset ones."""
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name in ENUM_FIELDS:
                value = value.value
            elif f.name in DATE_RANGES:
                value = [b.isoformat() if b is not None else None for b in value]
            elif f.name in NUMBER_RANGES:
                value = list(value)
            out[WIRE_NAMES[f.name]] = value
        return out

    @classmethod
    def from_wire(cls, payload: dict[str, Any]) -> FilterSet:
        """Inverse of ``to_wire``; keys that are not filter fields are ignored."""
        values: dict[str, Any] = {}
        for wire, raw in payload.items():
            name = FIELD_NAMES.get(wire)
            if name is None or raw is None:
                continue
            values[name] = raw
        return cls(**values)


def _coerce_field(name: str, raw: Any) -> Any:
    if name in ENUM_FIELDS:
        return coerce_enum(ENUM_FIELDS[name], raw, name)
    if name in NUMBER_RANGES:
        lower, upper = _pair(name, raw)
        return (_to_float(name, lower), _to_float(name, upper))
    if name in DATE_RANGES:
        lower, upper = _pair(name, raw)
        return (_to_date(name, lower), _to_date(name, upper))
    if name == "include_unlisted_equities":
        if not isinstance(raw, bool):
            raise FigiValidationError(f"{name}: expected a boolean", field=name)
        return raw
    return raw


def _pair(name: str, raw: Any) -> tuple[Any, Any]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise FigiValidationError(
            f"{name}: expected a [start, end] pair", field=name,
        )
    return raw[0], raw[1]


def _to_float(name: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FigiValidationError(f"{name}: bounds must be numbers", field=name)
    return float(value)


def _to_date(name: str, value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise FigiValidationError(
        f"{name}: bounds must be dates or YYYY-MM-DD strings", field=name,
    )


B = TypeVar("B", bound="FilterBuilder")


class FilterBuilder:
    """Chainable filter setters shared by the request builders.

    Setters accept enum members or their raw wire values and only record
    state; rules are checked when the owning builder's ``build()`` runs.
    """

    def __init__(self) -> None:
        self._filters: dict[str, Any] = {}

    def _set(self: B, name: str, value: Any) -> B:
        self._filters[name] = _coerce_field(name, value)
        return self

    def exch_code(self: B, value: ExchCode | str) -> B:
        return self._set("exch_code", value)

    def mic_code(self: B, value: MicCode | str) -> B:
        return self._set("mic_code", value)

    def currency(self: B, value: Currency | str) -> B:
        return self._set("currency", value)

    def market_sec_des(self: B, value: MarketSecDesc | str) -> B:
        return self._set("market_sec_des", value)

    def security_type(self: B, value: SecurityType | str) -> B:
        return self._set("security_type", value)

    def security_type2(self: B, value: SecurityType2 | str) -> B:
        return self._set("security_type2", value)

    def include_unlisted_equities(self: B, value: bool = True) -> B:
        return self._set("include_unlisted_equities", value)

    def option_type(self: B, value: OptionType | str) -> B:
        return self._set("option_type", value)

    def strike(self: B, lower: float | None = None, upper: float | None = None) -> B:
        return self._set("strike", (lower, upper))

    def contract_size(self: B, lower: float | None = None, upper: float | None = None) -> B:
        return self._set("contract_size", (lower, upper))

    def coupon(self: B, lower: float | None = None, upper: float | None = None) -> B:
        return self._set("coupon", (lower, upper))

    def expiration(self: B, start: date | str | None = None, end: date | str | None = None) -> B:
        return self._set("expiration", (start, end))

    def maturity(self: B, start: date | str | None = None, end: date | str | None = None) -> B:
        return self._set("maturity", (start, end))

    def state_code(self: B, value: StateCode | str) -> B:
        return self._set("state_code", value)

    def filters(self: B, filter_set: FilterSet) -> B:
        """Replace every filter field with the values of ``filter_set``."""
        self._filters = {
            f.name: getattr(filter_set, f.name)
            for f in fields(filter_set)
            if getattr(filter_set, f.name) is not None
        }
        return self

    def build_filters(self) -> FilterSet:
        return FilterSet(**self._filters)
