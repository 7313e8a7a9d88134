from sqlalchemy import Column, Integer, String, DateTime, func
from shopledger.db.database import Base


class AppSettings(Base):
    __tablename__ = "app_settings"

    id = Column(Integer, primary_key=True)
    app_name = Column(String(255), nullable=False)
    currency = Column(String(10), nullable=False)
    updated_at = Column(DateTime, server_default=func.now())
