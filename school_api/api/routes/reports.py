from __future__ import annotations

import io
from datetime import datetime, timezone

import pandas as pd
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from school_api.core.deps import require_roles, school_scope
from school_api.db.session import get_async_session
from school_api.repositories.academic import StudentRepository
from school_api.repositories.staff import EmployeeRepository
from school_api.schemas.auth import SessionUser, UserRole

# PUBLIC_INTERFACE
router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
)

EXPORT_FORMATS = ("csv", "xlsx", "pdf")

STUDENT_COLUMNS = ["student_id", "name", "grade", "roll_number", "admission_number", "status"]
EMPLOYEE_COLUMNS = ["employee_id", "name", "department", "position", "status", "salary", "date_of_joining"]


def _export_dataframe(
    df: pd.DataFrame,
    filename_base: str,
    export_format: str,
) -> StreamingResponse:
    """
    Convert DataFrame to the requested format and return a StreamingResponse.

    Supported formats:
      - csv: text/csv
      - xlsx: application/vnd.openxmlformats-officedocument.spreadsheetml.sheet
      - pdf: application/pdf (simple tabular rendering)
    """
    if export_format == "xlsx":
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Report")
        buffer.seek(0)
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    elif export_format == "pdf":
        buffer = _render_pdf(df, filename_base)
        media_type = "application/pdf"
    else:
        buffer = io.StringIO()
        df.to_csv(buffer, index=False)
        buffer.seek(0)
        media_type = "text/csv"

    headers = {
        "Content-Disposition": f'attachment; filename="{filename_base}.{export_format}"'
    }
    return StreamingResponse(buffer, media_type=media_type, headers=headers)


def _render_pdf(df: pd.DataFrame, filename_base: str) -> io.BytesIO:
    """Render a very simple landscape table with reportlab."""
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import landscape, letter
    from reportlab.lib.styles import getSampleStyleSheet
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Table, TableStyle

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=landscape(letter), leftMargin=18, rightMargin=18, topMargin=18, bottomMargin=18
    )
    styles = getSampleStyleSheet()
    stamp = datetime.now(tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    elements: list = [Paragraph(f"{filename_base.replace('_', ' ').title()} ({stamp})", styles["Title"])]

    data = [list(df.columns)] + df.astype(str).values.tolist()
    table = Table(data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
            ]
        )
    )
    elements.append(table)
    doc.build(elements)
    buffer.seek(0)
    return buffer


def _checked_format(export_format: str) -> str:
    fmt = (export_format or "csv").lower()
    if fmt == "excel":
        fmt = "xlsx"
    if fmt not in EXPORT_FORMATS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported export format '{export_format}'; use one of {', '.join(EXPORT_FORMATS)}",
        )
    return fmt


def _frame(rows, columns: list[str]) -> pd.DataFrame:
    return pd.DataFrame([{c: getattr(r, c) for c in columns} for r in rows], columns=columns)


# PUBLIC_INTERFACE
@router.get(
    "/students",
    summary="Student roster report",
    description="Exports the caller's school roster, ascending by name. Requires ADMIN.",
    response_description="File stream (CSV/XLSX/PDF)",
)
async def student_roster_report(
    user: SessionUser = Depends(require_roles(UserRole.ADMIN.value)),
    format: str = Query("csv", description="Export format: csv | xlsx | pdf"),
    session: AsyncSession = Depends(get_async_session),
):
    fmt = _checked_format(format)
    students = await StudentRepository(session, school_scope(user)).list_roster()
    return _export_dataframe(_frame(students, STUDENT_COLUMNS), "student_roster", fmt)


# PUBLIC_INTERFACE
@router.get(
    "/employees",
    summary="Employee roster report",
    description="Exports employees of the caller's school with salary and status. Requires ADMIN.",
    response_description="File stream (CSV/XLSX/PDF)",
)
async def employee_roster_report(
    user: SessionUser = Depends(require_roles(UserRole.ADMIN.value)),
    format: str = Query("csv", description="Export format: csv | xlsx | pdf"),
    session: AsyncSession = Depends(get_async_session),
):
    fmt = _checked_format(format)
    employees = await EmployeeRepository(session, school_scope(user)).list_roster()
    df = _frame(employees, EMPLOYEE_COLUMNS)
    df["salary"] = pd.to_numeric(df["salary"])
    return _export_dataframe(df, "employee_roster", fmt)
