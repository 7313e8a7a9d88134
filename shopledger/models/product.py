from sqlalchemy import Column, Integer, String, Numeric, DateTime, func
from shopledger.db.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    unit = Column(String(50), nullable=False, default="pcs")
    cost_price = Column(Numeric(10, 2), nullable=False, default=0)
    selling_price = Column(Numeric(10, 2), nullable=False, default=0)
    stock_quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
