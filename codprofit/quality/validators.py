"""
Data Validation Module

Rule-based checks run on raw polars frames before they are turned into
domain models.

Features:
- Null checks
- Uniqueness checks
- Range checks for monetary columns
- Allowed-value checks for closed enumerations
- Referential integrity between orders and their items
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import polars as pl
import structlog

from codprofit.domain.enums import CourierName, OrderStatus

logger = structlog.get_logger(__name__)


class ValidationSeverity(str, Enum):
    """Severity levels for validation failures"""
    ERROR = "error"  # Blocks ingestion
    WARNING = "warning"  # Logged, ingestion continues


class ValidationStatus(str, Enum):
    """Overall validation status"""
    PASSED = "passed"
    FAILED = "failed"
    PARTIAL = "partial"


@dataclass
class ValidationCheck:
    """Single validation check result"""
    name: str
    passed: bool
    severity: ValidationSeverity
    message: str
    failed_rows: int = 0
    total_rows: int = 0
    details: Optional[Dict[str, Any]] = None


@dataclass
class ValidationResult:
    """Result of a full validator run"""
    status: ValidationStatus
    checks: List[ValidationCheck] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    @property
    def total_checks(self) -> int:
        return len(self.checks)

    @property
    def passed_checks(self) -> int:
        return sum(1 for c in self.checks if c.passed)

    @property
    def errors(self) -> List[ValidationCheck]:
        return [c for c in self.checks if not c.passed and c.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationCheck]:
        return [c for c in self.checks if not c.passed and c.severity == ValidationSeverity.WARNING]


Check = Callable[[pl.DataFrame], ValidationCheck]


def _missing_column(name: str, column: str, severity: ValidationSeverity) -> ValidationCheck:
    return ValidationCheck(
        name=name,
        passed=False,
        severity=severity,
        message=f"Column '{column}' not found",
    )


class DataValidator:
    """
    Chainable validator for polars frames.

    Example:
        validator = DataValidator().add_not_null_check("id").add_range_check("cod_amount", min_value=0)
        result = validator.validate(df)
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode  # Warnings fail the run too
        self._checks: List[Check] = []

    def add_not_null_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check for null values in column"""
        name = f"not_null_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return _missing_column(name, column, severity)
            null_count = df[column].null_count()
            return ValidationCheck(
                name=name,
                passed=null_count == 0,
                severity=severity,
                message=f"Column '{column}' has {null_count} null values",
                failed_rows=null_count,
                total_rows=df.height,
            )

        self._checks.append(check)
        return self

    def add_unique_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check for duplicate values in column"""
        name = f"unique_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return _missing_column(name, column, severity)
            duplicates = df.height - df[column].n_unique()
            return ValidationCheck(
                name=name,
                passed=duplicates == 0,
                severity=severity,
                message=f"Column '{column}' has {duplicates} duplicate values",
                failed_rows=duplicates,
                total_rows=df.height,
            )

        self._checks.append(check)
        return self

    def add_range_check(
        self,
        column: str,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
        required: bool = True,
    ) -> "DataValidator":
        """Add check that values fall inside [min_value, max_value]; nulls are ignored"""
        name = f"range_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                if not required:
                    return ValidationCheck(name=name, passed=True, severity=severity, message="Optional column absent")
                return _missing_column(name, column, severity)

            condition = pl.lit(False)
            if min_value is not None:
                condition = condition | (pl.col(column) < min_value)
            if max_value is not None:
                condition = condition | (pl.col(column) > max_value)

            out_of_range = df.filter(condition).height
            return ValidationCheck(
                name=name,
                passed=out_of_range == 0,
                severity=severity,
                message=f"Column '{column}' has {out_of_range} values outside [{min_value}, {max_value}]",
                failed_rows=out_of_range,
                total_rows=df.height,
                details={"min": min_value, "max": max_value},
            )

        self._checks.append(check)
        return self

    def add_enum_check(
        self,
        column: str,
        allowed_values: List[Any],
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check for values in an allowed set"""
        name = f"enum_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return _missing_column(name, column, severity)
            invalid = df.filter(
                ~pl.col(column).is_in(allowed_values) & pl.col(column).is_not_null()
            ).height
            return ValidationCheck(
                name=name,
                passed=invalid == 0,
                severity=severity,
                message=f"Column '{column}' has {invalid} values outside {allowed_values}",
                failed_rows=invalid,
                total_rows=df.height,
            )

        self._checks.append(check)
        return self

    def add_referential_integrity_check(
        self,
        column: str,
        reference_df: pl.DataFrame,
        reference_column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check that every value exists in reference_df[reference_column]"""
        name = f"ref_integrity_{column}"
        reference_values = reference_df[reference_column].cast(pl.Utf8).unique().to_list()

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return _missing_column(name, column, severity)
            orphans = df.filter(
                ~pl.col(column).cast(pl.Utf8).is_in(reference_values) & pl.col(column).is_not_null()
            ).height
            return ValidationCheck(
                name=name,
                passed=orphans == 0,
                severity=severity,
                message=f"Column '{column}' has {orphans} orphan records",
                failed_rows=orphans,
                total_rows=df.height,
            )

        self._checks.append(check)
        return self

    def validate(self, df: pl.DataFrame) -> ValidationResult:
        """
        Run all checks on a frame.

        Args:
            df: Frame to validate

        Returns:
            ValidationResult with one ValidationCheck per registered check
        """
        result = ValidationResult(status=ValidationStatus.PASSED)
        logger.debug(f"Running {len(self._checks)} validation checks on {df.height} rows")

        for check in self._checks:
            outcome = check(df)
            result.checks.append(outcome)
            if not outcome.passed:
                logger.warning(
                    f"Validation failed: {outcome.name}",
                    message=outcome.message,
                    severity=outcome.severity.value,
                )

        if result.errors or (result.warnings and self.strict_mode):
            result.status = ValidationStatus.FAILED
        elif result.warnings:
            result.status = ValidationStatus.PARTIAL
        result.completed_at = datetime.now()

        return result


_MONEY_COLUMNS = ["cod_amount", "courier_fee", "rto_penalty", "packaging_cost", "overhead_cost", "tax_amount"]


def create_orders_validator() -> DataValidator:
    """Validator for the orders frame"""
    validator = (
        DataValidator()
        .add_not_null_check("id")
        .add_unique_check("id")
        .add_not_null_check("created_at")
        .add_not_null_check("status")
        .add_enum_check("status", [s.value for s in OrderStatus])
        .add_enum_check("courier", [c.value for c in CourierName])
    )
    for column in _MONEY_COLUMNS:
        validator.add_range_check(column, min_value=0, required=False)
    return validator


def create_order_items_validator(orders_df: pl.DataFrame) -> DataValidator:
    """Validator for the order items frame, checked against its orders"""
    return (
        DataValidator()
        .add_not_null_check("order_id")
        .add_not_null_check("product_id")
        .add_range_check("quantity", min_value=1, required=False)
        .add_range_check("sale_price", min_value=0, required=False)
        .add_range_check("cogs_at_time_of_order", min_value=0, required=False)
        .add_referential_integrity_check("order_id", orders_df, "id")
    )
