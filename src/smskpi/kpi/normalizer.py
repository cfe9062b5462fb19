"""Row filtering and normalization into spend transactions."""
import re
import sys
import calendar
import functools
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ValidationError, ValidationInfo, field_validator

from .models import Transaction
from smskpi.csvio.reader import Row
from smskpi.utils.logger import get_logger

logger = get_logger()

# strftime equivalent of dd-MM-yyyy HH:mm, e.g. "04-01-2026 20:52"
DATE_FORMAT = "%d-%m-%Y %H:%M"
DEFAULT_LABEL = "Unknown"
EXCLUDED_LABELS = ("personal-income", "non-payment")

REQUIRED_COLUMNS = ("Sender", "Date", "Amount")

# ASCII digits only
_NUMBER = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")

# Amounts beyond double range are treated as non-finite
MAX_AMOUNT = Decimal(sys.float_info.max)

# Fixed-width numeric fields understood by the day-clamping parser
_DATE_FIELDS = {
    "d": r"(?P<day>[0-9]{2})",
    "m": r"(?P<month>[0-9]{2})",
    "Y": r"(?P<year>[0-9]{4})",
    "H": r"(?P<hour>[0-9]{2})",
    "M": r"(?P<minute>[0-9]{2})",
    "S": r"(?P<second>[0-9]{2})",
}


def parse_amount(text: str) -> Decimal:
    """Parse a plain decimal number; raises ValueError otherwise."""
    candidate = text.strip()
    if not _NUMBER.match(candidate):
        raise ValueError(f"Not a decimal amount: {text!r}")
    try:
        value = Decimal(candidate)
    except InvalidOperation:
        raise ValueError(f"Not a decimal amount: {text!r}")
    if not value.is_finite() or abs(value) > MAX_AMOUNT:
        raise ValueError(f"Amount out of range: {text!r}")
    return value


@functools.lru_cache(maxsize=32)
def _date_pattern(date_format: str) -> Optional["re.Pattern"]:
    """Regex for a format built only from %d %m %Y %H %M %S, else None."""
    parts = []
    seen = set()
    i = 0
    while i < len(date_format):
        c = date_format[i]
        if c == "%":
            directive = date_format[i + 1:i + 2]
            if directive not in _DATE_FIELDS or directive in seen:
                return None
            seen.add(directive)
            parts.append(_DATE_FIELDS[directive])
            i += 2
        else:
            parts.append(re.escape(c))
            i += 1
    if not {"d", "m", "Y"} <= seen:
        return None
    return re.compile("^" + "".join(parts) + "$")


def parse_timestamp(text: str, date_format: str = DATE_FORMAT) -> datetime:
    """
    Parse a timestamp that matches ``date_format`` exactly, zero padding included.

    A day of 29-31 past the end of its month resolves to the month's last
    day, so ``31-04-2026 10:00`` reads as 30 April. Days above 31 and months
    above 12 are rejected.
    """
    candidate = text.strip()
    pattern = _date_pattern(date_format)
    if pattern is None:
        parsed = datetime.strptime(candidate, date_format)
        if parsed.strftime(date_format) != candidate:
            raise ValueError(f"Timestamp {text!r} does not match {date_format}")
        return parsed

    match = pattern.match(candidate)
    if not match:
        raise ValueError(f"Timestamp {text!r} does not match {date_format}")
    fields = {key: int(value) for key, value in match.groupdict().items() if value is not None}
    year, month, day = fields["year"], fields["month"], fields["day"]
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise ValueError(f"Timestamp {text!r} has no such date")
    day = min(day, calendar.monthrange(year, month)[1])
    # datetime validates hour, minute and second ranges
    return datetime(
        year, month, day,
        fields.get("hour", 0), fields.get("minute", 0), fields.get("second", 0)
    )


class RowSchema(BaseModel):
    """Pydantic schema for the typed fields of a CSV row."""
    sender: str
    timestamp: datetime
    amount: Decimal
    label: str

    @field_validator("amount", mode="before")
    @classmethod
    def _validate_amount(cls, value):
        if isinstance(value, str):
            return parse_amount(value)
        return value

    @field_validator("timestamp", mode="before")
    @classmethod
    def _validate_timestamp(cls, value, info: ValidationInfo):
        if isinstance(value, str):
            date_format = (info.context or {}).get("date_format", DATE_FORMAT)
            return parse_timestamp(value, date_format)
        return value


class RowNormalizer:
    """Turns CSV rows into spend transactions, silently dropping the rest."""

    def __init__(
        self,
        date_format: str = DATE_FORMAT,
        excluded_labels: Iterable[str] = EXCLUDED_LABELS,
        default_label: str = DEFAULT_LABEL
    ):
        self.date_format = date_format
        self.excluded_labels = frozenset(label.strip().lower() for label in excluded_labels)
        self.default_label = default_label

    def normalize(self, row: Row) -> Optional[Transaction]:
        """
        Normalize one row.

        Args:
            row: Header -> cell mapping

        Returns:
            Transaction, or None when the row is not a valid spend event
        """
        if any(column not in row for column in REQUIRED_COLUMNS):
            return None

        label = row.get("Label", self.default_label).strip()
        if label.lower() in self.excluded_labels:
            return None

        try:
            schema = RowSchema.model_validate(
                {
                    "sender": row["Sender"],
                    "timestamp": row["Date"],
                    "amount": row["Amount"],
                    "label": label,
                },
                context={"date_format": self.date_format}
            )
        except ValidationError as e:
            logger.debug(f"Dropping row: {e.error_count()} invalid field(s)")
            return None

        return Transaction(
            sender=schema.sender,
            timestamp=schema.timestamp,
            amount=schema.amount,
            label=schema.label
        )

    def normalize_all(self, rows: Iterable[Row]) -> Tuple[List[Transaction], int]:
        """
        Normalize a batch of rows.

        Returns:
            Valid transactions in input order and the number of dropped rows
        """
        transactions = []
        discarded = 0
        for row in rows:
            txn = self.normalize(row)
            if txn is None:
                discarded += 1
            else:
                transactions.append(txn)
        return transactions, discarded


_default_normalizer = RowNormalizer()


def normalize_row(row: Row) -> Optional[Transaction]:
    """Normalize a row with the default rules."""
    return _default_normalizer.normalize(row)


def normalize_rows(rows: Iterable[Row]) -> Tuple[List[Transaction], int]:
    """Normalize rows with the default rules."""
    return _default_normalizer.normalize_all(rows)
