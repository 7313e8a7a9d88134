from fastapi import APIRouter, Depends

from shopledger.db.database import Database, get_db
from shopledger.schemas.report import ProductSalesSummary, SalesStats
from shopledger.schemas.sale import SaleIn, SaleOut
from shopledger.services.report_service import ReportService
from shopledger.services.sale_service import SaleRecorder, get_sale_recorder

router = APIRouter(prefix="/api", tags=["sales"])


def get_report_service(database: Database = Depends(get_db)) -> ReportService:
    return ReportService(database)


@router.post("/sales", response_model=SaleOut)
async def record_sale(body: SaleIn, recorder: SaleRecorder = Depends(get_sale_recorder)):
    return await recorder.record_sale(body.product_id, body.quantity)


@router.get("/sales/summary", response_model=list[ProductSalesSummary])
async def sales_summary(service: ReportService = Depends(get_report_service)):
    return await service.sales_summary()


@router.get("/stats", response_model=SalesStats)
async def stats(service: ReportService = Depends(get_report_service)):
    return await service.stats()
