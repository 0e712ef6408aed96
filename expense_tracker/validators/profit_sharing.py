"""Profit-sharing rules for projects.

A project may split its net profit between partners. The split is only
checked when profit sharing is enabled:
- a sharing type other than ``none`` must be chosen
- ``two-way`` needs exactly 2 partners, ``three-way`` exactly 3,
  ``custom`` at least 1
- every partner needs a name and a percentage between 0 and 100
- the percentages must add up to 100
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from expense_tracker.models.project import ProfitSharingType
from expense_tracker.validators.validation_report import ValidationReport

PERCENTAGE_TOLERANCE = Decimal("0.01")

REQUIRED_SHARE_COUNTS = {
    ProfitSharingType.TWO_WAY: 2,
    ProfitSharingType.THREE_WAY: 3,
}


class ProfitSharingValidator:
    """Validates a project's profit-sharing configuration."""

    @staticmethod
    def _share_fields(share):
        if isinstance(share, dict):
            return share.get("name"), share.get("percentage")
        return share.name, share.percentage

    @staticmethod
    def validate(
        enabled: bool,
        sharing_type: Optional[ProfitSharingType],
        shares: Iterable,
    ) -> ValidationReport:
        """Check a profit-sharing configuration.

        Args:
            enabled: Whether profit sharing is switched on
            sharing_type: Selected split type
            shares: ProfitShare models or dicts with ``name``/``percentage``

        Returns:
            ValidationReport with any issues found

        Example:
            >>> report = ProfitSharingValidator.validate(
            ...     True,
            ...     ProfitSharingType.TWO_WAY,
            ...     [{"name": "A", "percentage": 50}, {"name": "B", "percentage": 40}],
            ... )
            >>> report.is_valid()
            False
        """
        report = ValidationReport()
        shares = list(shares or [])
        sharing_type = ProfitSharingType(sharing_type or ProfitSharingType.NONE)

        if not enabled:
            if shares:
                report.add_warning(
                    "profitShares",
                    "Profit shares are ignored while profit sharing is disabled",
                    len(shares),
                )
            return report

        if sharing_type == ProfitSharingType.NONE:
            report.add_error(
                "profitSharingType",
                "Choose a profit sharing type when profit sharing is enabled",
                sharing_type.value,
            )
            return report

        required = REQUIRED_SHARE_COUNTS.get(sharing_type)
        if required is not None and len(shares) != required:
            report.add_error(
                "profitShares",
                f"{sharing_type.value} profit sharing needs exactly {required} "
                f"partners, got {len(shares)}",
                len(shares),
            )
        elif not shares:
            report.add_error(
                "profitShares",
                "Custom profit sharing needs at least one partner",
                0,
            )

        total = Decimal("0")
        for index, share in enumerate(shares):
            name, raw_percentage = ProfitSharingValidator._share_fields(share)
            context = {"share": index + 1}

            if not name or not str(name).strip():
                report.add_error(
                    "profitShares.name", "Partner name is required", name, context
                )

            try:
                percentage = Decimal(str(raw_percentage))
            except (InvalidOperation, ValueError, TypeError):
                report.add_error(
                    "profitShares.percentage",
                    f"Percentage must be a number, got {raw_percentage!r}",
                    raw_percentage,
                    context,
                )
                continue

            if percentage < 0 or percentage > 100:
                report.add_error(
                    "profitShares.percentage",
                    f"Percentage must be between 0 and 100, got {percentage}",
                    raw_percentage,
                    context,
                )
            total += percentage

        if shares and abs(total - Decimal("100")) > PERCENTAGE_TOLERANCE:
            report.add_error(
                "profitShares",
                f"Profit share percentages must add up to 100%, got {total.normalize():f}%",
                total,
            )

        return report
