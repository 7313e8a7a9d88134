from pydantic import BaseModel


class ProductSalesSummary(BaseModel):
    product_id: int
    name: str
    unit: str
    total_sales: int
    total_quantity: int
    total_revenue: float
    total_profit: float


class SalesStats(BaseModel):
    products_sold: int
    total_revenue: float
    total_profit: float
    avg_profit_per_sale: float | None = None
