"""Export routes: year-end bundle and per-type expense downloads."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from expense_tracker.api.dependencies import get_current_user, get_export_service
from expense_tracker.models.user import User
from expense_tracker.services.export_service import ExportService, parse_expense_type
from expense_tracker.writers.csv_export import expenses_csv, export_filename, to_json

router = APIRouter(prefix="/export", tags=["export"])

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
JSON_MEDIA_TYPE = "application/json"


def _download(content: str, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/all")
def export_all(
    export_format: str = Query(default="json", alias="format"),
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    user: User = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
):
    """Projects, expenses and employees as one download.

    ``format=csv`` returns a sectioned CSV; anything else returns JSON.
    ``year`` limits the expenses to those created in that year.
    """
    bundle = service.export_all(user.id, year=year)
    if export_format == "csv":
        return _download(
            bundle.to_csv(),
            CSV_MEDIA_TYPE,
            export_filename("expense-tracking-export", year, "csv"),
        )
    return _download(
        to_json(bundle.to_document()),
        JSON_MEDIA_TYPE,
        export_filename("expense-tracking-export", year, "json"),
    )


@router.get("/expenses/{expense_type}")
def export_expenses(
    expense_type: str,
    export_format: str = Query(default="json", alias="format"),
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    user: User = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
):
    parsed_type = parse_expense_type(expense_type)
    rows = service.export_expenses(user.id, parsed_type, year=year)
    base = f"{parsed_type.value}-expenses"
    if export_format == "csv":
        return _download(
            expenses_csv(rows, parsed_type),
            CSV_MEDIA_TYPE,
            export_filename(base, year, "csv"),
        )
    return _download(
        to_json(rows), JSON_MEDIA_TYPE, export_filename(base, year, "json")
    )
