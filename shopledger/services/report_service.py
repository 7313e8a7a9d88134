from sqlalchemy import func, select

from shopledger.db.database import Database
from shopledger.models import Product, Sale


class ReportService:
    def __init__(self, database: Database):
        self.database = database

    async def sales_summary(self) -> list[dict]:
        """Per-product sale totals, highest revenue first. Products without sales are omitted."""
        total_revenue = func.sum(Sale.total_amount).label("total_revenue")
        query = (
            select(
                Product.id.label("product_id"),
                Product.name,
                Product.unit,
                func.count(Sale.id).label("total_sales"),
                func.sum(Sale.quantity).label("total_quantity"),
                total_revenue,
                func.sum(Sale.profit).label("total_profit"),
            )
            .select_from(Sale)
            .join(Product, Sale.product_id == Product.id)
            .group_by(Product.id, Product.name, Product.unit)
            .order_by(total_revenue.desc())
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            return [dict(row._mapping) for row in result]

    async def stats(self) -> dict:
        query = select(
            func.count(Sale.product_id.distinct()).label("products_sold"),
            func.coalesce(func.sum(Sale.total_amount), 0).label("total_revenue"),
            func.coalesce(func.sum(Sale.profit), 0).label("total_profit"),
            func.avg(Sale.profit).label("avg_profit_per_sale"),
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            return dict(result.one()._mapping)
