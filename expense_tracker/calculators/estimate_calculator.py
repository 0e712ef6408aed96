"""Estimate calculations.

This module implements the arithmetic behind customer estimates:
- Line item totals (quantity x unit price)
- Subtotal, tax and grand total
- Sequential per-user estimate numbers (EST-0001, EST-0002, ...)
- Status counts and approved value across a list of estimates

All money values are Decimals rounded half-up to cents.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from expense_tracker.models.estimate import EstimateItem, EstimateStatus, EstimateSummary

CENTS = Decimal("0.01")
DEFAULT_TAX_RATE = Decimal("16")
DEFAULT_ITEM_AMOUNT = Decimal("1")

ESTIMATE_NUMBER_PREFIX = "EST-"
_ESTIMATE_NUMBER_PATTERN = re.compile(r"^EST-(\d+)$")


def to_money(value) -> Decimal:
    """Round a numeric value to cents (half-up)."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass
class EstimateTotals:
    """Computed totals for an estimate.

    Attributes:
        items: Line items with their ``total`` filled in
        subtotal: Sum of item totals
        tax_rate: Tax rate applied, in percent
        tax_amount: subtotal x tax_rate / 100
        total: subtotal + tax_amount

    Example:
        >>> totals = EstimateTotals(
        ...     items=[],
        ...     subtotal=Decimal("100.00"),
        ...     tax_rate=Decimal("16"),
        ...     tax_amount=Decimal("16.00"),
        ...     total=Decimal("116.00"),
        ... )
        >>> totals.total
        Decimal('116.00')
    """

    items: List[EstimateItem]
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal


def calculate_item_total(
    amount: Optional[Decimal], unit_price: Optional[Decimal]
) -> Decimal:
    """Calculate the total of one estimate line.

    A missing quantity counts as 1 and a missing unit price as 0.

    Args:
        amount: Quantity of the line
        unit_price: Price per unit

    Returns:
        amount x unit_price, rounded to cents

    Example:
        >>> calculate_item_total(Decimal("3"), Decimal("25.50"))
        Decimal('76.50')
        >>> calculate_item_total(None, Decimal("10"))
        Decimal('10.00')
    """
    quantity = DEFAULT_ITEM_AMOUNT if amount is None else Decimal(amount)
    price = Decimal("0") if unit_price is None else Decimal(unit_price)
    return to_money(quantity * price)


def calculate_estimate_totals(
    items: Iterable[EstimateItem],
    tax_rate: Optional[Decimal] = None,
    default_tax_rate: Decimal = DEFAULT_TAX_RATE,
) -> EstimateTotals:
    """Calculate item totals, subtotal, tax and grand total.

    Args:
        items: Line items as entered; any client-supplied totals are ignored
        tax_rate: Tax rate in percent; ``None`` uses ``default_tax_rate``
        default_tax_rate: Rate applied when no tax rate is given

    Returns:
        EstimateTotals with recomputed items

    Example:
        >>> totals = calculate_estimate_totals(
        ...     [EstimateItem(description="Paint", amount=2, unit_price=50)],
        ...     tax_rate=Decimal("10"),
        ... )
        >>> totals.subtotal, totals.tax_amount, totals.total
        (Decimal('100.00'), Decimal('10.00'), Decimal('110.00'))
    """
    rate = Decimal(default_tax_rate if tax_rate is None else tax_rate)

    computed: List[EstimateItem] = []
    for item in items:
        amount = DEFAULT_ITEM_AMOUNT if item.amount is None else item.amount
        unit_price = Decimal("0") if item.unit_price is None else item.unit_price
        computed.append(
            EstimateItem(
                description=item.description,
                amount=amount,
                unit_price=unit_price,
                total=calculate_item_total(amount, unit_price),
            )
        )

    subtotal = to_money(sum((item.total for item in computed), Decimal("0")))
    tax_amount = to_money(subtotal * rate / Decimal("100"))
    total = to_money(subtotal + tax_amount)

    return EstimateTotals(
        items=computed,
        subtotal=subtotal,
        tax_rate=rate,
        tax_amount=tax_amount,
        total=total,
    )


def format_estimate_number(sequence: int) -> str:
    """Format a sequence number as an estimate number.

    Example:
        >>> format_estimate_number(7)
        'EST-0007'
        >>> format_estimate_number(12345)
        'EST-12345'
    """
    if sequence < 1:
        raise ValueError(f"Estimate sequence must be positive, got {sequence}")
    return f"{ESTIMATE_NUMBER_PREFIX}{sequence:04d}"


def parse_estimate_sequence(estimate_number: Optional[str]) -> Optional[int]:
    """Extract the sequence from an ``EST-NNNN`` number.

    Returns:
        The sequence, or None for numbers in any other format
    """
    if not estimate_number:
        return None
    match = _ESTIMATE_NUMBER_PATTERN.match(estimate_number.strip())
    if not match:
        return None
    return int(match.group(1))


def next_estimate_number(existing_numbers: Iterable[Optional[str]]) -> str:
    """Generate the next estimate number for a user.

    The next number follows the highest existing sequence, so numbers
    freed by deleting an estimate are never handed out again.

    Args:
        existing_numbers: Estimate numbers the user already has

    Returns:
        The next estimate number

    Example:
        >>> next_estimate_number([])
        'EST-0001'
        >>> next_estimate_number(["EST-0001", "EST-0004", "CUSTOM-9"])
        'EST-0005'
    """
    sequences = [
        seq
        for seq in (parse_estimate_sequence(number) for number in existing_numbers)
        if seq is not None
    ]
    return format_estimate_number(max(sequences, default=0) + 1)


def summarize_estimates(estimates: Iterable) -> EstimateSummary:
    """Count estimates by status and total the approved value.

    An approved estimate counts with its approved amount when one was
    recorded, otherwise with its grand total.

    Args:
        estimates: Estimate records or models with ``status``,
            ``approved_amount`` and ``total``

    Returns:
        EstimateSummary
    """
    summary = EstimateSummary()
    approved_amount = Decimal("0")

    for estimate in estimates:
        status = EstimateStatus(estimate.status)
        summary.total += 1
        if status == EstimateStatus.DRAFT:
            summary.drafts += 1
        elif status == EstimateStatus.SENT:
            summary.sent += 1
        elif status == EstimateStatus.APPROVED:
            summary.approved += 1
            approved = Decimal(estimate.approved_amount or 0)
            approved_amount += approved if approved else Decimal(estimate.total or 0)
        elif status == EstimateStatus.REJECTED:
            summary.rejected += 1

    summary.approved_amount = to_money(approved_amount)
    return summary
