"""Client-side validation for filters, requests and mapping batches.

Checks run in a fixed order so the reported failure is deterministic:

    1. exchCode / micCode mutual exclusion
    2. numeric intervals (strike, contract_size, coupon): lower <= upper
    3. date intervals (expiration, maturity): lower <= upper, span <= 365 days
    4. securityType2 Option/Warrant requires expiration
    5. securityType2 Pool requires maturity

Interval checks only apply when both bounds are present; a one-sided
interval passes both the ordering and the span check.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from figiclient.config import MAX_JOBS_WITH_KEY, MAX_JOBS_WITHOUT_KEY
from figiclient.errors import FigiErrorCode, FigiValidationError
from figiclient.models.enums import (
    AMBIGUOUS_ID_TYPES,
    EXPIRATION_REQUIRED,
    MATURITY_REQUIRED,
)

if TYPE_CHECKING:
    from figiclient.models.filter_set import FilterSet
    from figiclient.models.requests import FilterRequest, MappingRequest, SearchRequest

MAX_DATE_SPAN = timedelta(days=365)

NUMBER_RANGE_FIELDS = ("strike", "contract_size", "coupon")
DATE_RANGE_FIELDS = ("expiration", "maturity")


@dataclass(frozen=True)
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""
    field: str | None = None


@dataclass
class ValidationResult:
    """Ordered validation check results."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    @property
    def first_failure(self) -> ValidationCheck | None:
        failed = self.failed_checks
        return failed[0] if failed else None


def check_filters(filters: FilterSet) -> ValidationResult:
    """Run every filter rule and return the results in check order."""
    result = ValidationResult()

    # 1. Mutual exclusion
    if filters.exch_code is not None and filters.mic_code is not None:
        result.checks.append(ValidationCheck(
            "exclusive_exchange", False, "Cannot set both exchCode and micCode",
            field="exch_code",
        ))
    else:
        result.checks.append(ValidationCheck("exclusive_exchange", True))

    # 2. Numeric intervals
    for name in NUMBER_RANGE_FIELDS:
        lower, upper = getattr(filters, name) or (None, None)
        if lower is not None and upper is not None and lower > upper:
            result.checks.append(ValidationCheck(
                f"{name}_order", False,
                f"{name}: start value cannot be greater than end value",
                field=name,
            ))
        else:
            result.checks.append(ValidationCheck(f"{name}_order", True))

    # 3. Date intervals
    for name in DATE_RANGE_FIELDS:
        lower, upper = getattr(filters, name) or (None, None)
        if lower is None or upper is None:
            result.checks.append(ValidationCheck(f"{name}_range", True))
        elif lower > upper:
            result.checks.append(ValidationCheck(
                f"{name}_range", False,
                f"{name}: start date cannot be after end date",
                field=name,
            ))
        elif upper - lower > MAX_DATE_SPAN:
            result.checks.append(ValidationCheck(
                f"{name}_range", False,
                f"{name}: date range cannot exceed 1 year",
                field=name,
            ))
        else:
            result.checks.append(ValidationCheck(f"{name}_range", True))

    # 4. / 5. Conditional requirements
    if filters.security_type2 in EXPIRATION_REQUIRED and filters.expiration is None:
        result.checks.append(ValidationCheck(
            "expiration_required", False,
            "expiration is required for Option or Warrant security types",
            field="expiration",
        ))
    else:
        result.checks.append(ValidationCheck("expiration_required", True))

    if filters.security_type2 in MATURITY_REQUIRED and filters.maturity is None:
        result.checks.append(ValidationCheck(
            "maturity_required", False,
            "maturity is required for Pool security types",
            field="maturity",
        ))
    else:
        result.checks.append(ValidationCheck("maturity_required", True))

    return result


def validate_filters(filters: FilterSet) -> None:
    """Raise ``FigiValidationError`` for the first failed filter rule."""
    failure = check_filters(filters).first_failure
    if failure is not None:
        raise FigiValidationError(
            failure.message,
            code=FigiErrorCode.VALIDATION_FAILED,
            field=failure.field,
        )


def validate_mapping_request(request: MappingRequest) -> None:
    validate_filters(request.filters)
    if request.id_type in AMBIGUOUS_ID_TYPES and request.filters.security_type2 is None:
        raise FigiValidationError(
            "securityType2 is required when idType is BASE_TICKER or ID_EXCH_SYMBOL",
            field="security_type2",
        )


def validate_search_request(request: SearchRequest) -> None:
    if not request.query or not request.query.strip():
        raise FigiValidationError(
            "query must be a non-empty string", field="query",
        )
    validate_filters(request.filters)


def validate_filter_request(request: FilterRequest) -> None:
    validate_filters(request.filters)
    if request.query is None and request.filters.is_empty():
        raise FigiValidationError(
            "At least one field must be set in FilterRequest",
            field="query",
        )


def check_batch_size(size: int, has_api_key: bool) -> None:
    """Enforce the mapping job limits before anything is sent.

    Zero jobs is always rejected; without a key at most 5 jobs are
    allowed, and never more than 100.
    """
    if size == 0:
        raise FigiValidationError(
            "No requests to send", code=FigiErrorCode.BATCH_SIZE,
        )
    if not has_api_key and size > MAX_JOBS_WITHOUT_KEY:
        raise FigiValidationError(
            f"Bulk mapping request cannot exceed {MAX_JOBS_WITHOUT_KEY} "
            f"requests without an API key (got {size})",
            code=FigiErrorCode.BATCH_SIZE,
        )
    if size > MAX_JOBS_WITH_KEY:
        raise FigiValidationError(
            f"Bulk mapping request cannot exceed {MAX_JOBS_WITH_KEY} requests (got {size})",
            code=FigiErrorCode.BATCH_SIZE,
        )
