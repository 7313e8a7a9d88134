from sqlalchemy import Column, Integer, Numeric, ForeignKey, DateTime, func
from shopledger.db.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    # No ON DELETE CASCADE: product deletion removes its sales explicitly
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    profit = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
