from shopledger.models.product import Product
from shopledger.models.sale import Sale
from shopledger.models.settings import AppSettings

__all__ = ["Product", "Sale", "AppSettings"]
