from io import BytesIO
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
import pandas as pd
from database import get_db
import crud.daily_entry as crud_daily_entry
import crud.transactions as crud_transactions
from calculator.profitability import build_profitability_report
from schemas.reports import BatchProfitabilityReport
from routers.batch import get_owned_batch
from utils.auth_utils import RequestContext, get_request_context

import logging
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
)


def _profitability_for(batch_id: int, db: Session, context: RequestContext) -> BatchProfitabilityReport:
    db_batch = get_owned_batch(db, batch_id, context)
    entries = crud_daily_entry.get_entries_for_batch(db, batch_id=batch_id, tenant_id=context.tenant_id)
    transactions = crud_transactions.get_transactions_for_batch(db, batch_id=batch_id, tenant_id=context.tenant_id)
    return build_profitability_report(db_batch, entries, transactions)


@router.get("/batches/{batch_id}/profitability", response_model=BatchProfitabilityReport)
def get_batch_profitability(batch_id: int, db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    return _profitability_for(batch_id, db, context)


@router.get("/batches/{batch_id}/profitability.xlsx")
def export_batch_profitability(batch_id: int, db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    report = _profitability_for(batch_id, db, context)

    summary = pd.DataFrame([
        {"Metric": "Revenue", "Value": float(report.revenue)},
        {"Metric": "Costs (COGS)", "Value": float(report.cogs)},
        {"Metric": "Net Profit", "Value": float(report.profit)},
        {"Metric": "FCR", "Value": round(report.fcr, 2)},
        {"Metric": "Mortality Rate (%)", "Value": round(report.mortality_rate, 2)},
        {"Metric": "Feed Consumed (kg)", "Value": report.total_feed_consumed_in_kg},
        {"Metric": "Weight Sold (kg)", "Value": report.total_weight_sold},
    ])
    breakdown = pd.DataFrame(
        [{"Item": item.name, "Cost": float(item.value)} for item in report.cost_breakdown],
        columns=["Item", "Cost"],
    )

    excel_file = BytesIO()
    with pd.ExcelWriter(excel_file, engine="openpyxl") as writer:
        summary.to_excel(writer, index=False, sheet_name="Summary")
        breakdown.to_excel(writer, index=False, sheet_name="Cost Breakdown")
        header_fill = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")
        for sheet in writer.sheets.values():
            for cell in sheet[1]:
                cell.font = Font(bold=True)
                cell.fill = header_fill
            for column in range(1, sheet.max_column + 1):
                sheet.column_dimensions[get_column_letter(column)].width = 22
    excel_file.seek(0)

    logger.info("Exported profitability report for batch_id=%d", batch_id)
    headers = {
        'Content-Disposition': f'attachment; filename="batch_{batch_id}_profitability.xlsx"'
    }
    return StreamingResponse(excel_file, media_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet', headers=headers)
