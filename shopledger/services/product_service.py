import logging

from sqlalchemy import delete, select

from shopledger.db.database import Database
from shopledger.errors import ErrorType
from shopledger.exceptions import AppException
from shopledger.models import Product, Sale
from shopledger.schemas.product import ProductIn

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, database: Database):
        self.database = database

    async def list_products(self) -> list[Product]:
        async with self.database.session() as session:
            result = await session.execute(select(Product).order_by(Product.name))
            return list(result.scalars().all())

    async def create_product(self, data: ProductIn) -> Product:
        async with self.database.transaction() as session:
            product = Product(**data.model_dump())
            session.add(product)
            await session.flush()
            await session.refresh(product)
        logger.info(f"Created product {product.id} ({product.name})")
        return product

    async def update_product(self, product_id: int, data: ProductIn) -> Product:
        async with self.database.transaction() as session:
            product = await session.get(Product, product_id)
            if product is None:
                raise AppException(ErrorType.NOT_FOUND, "Product not found")
            for field, value in data.model_dump().items():
                setattr(product, field, value)
            await session.flush()
            await session.refresh(product)
        return product

    async def delete_product(self, product_id: int) -> None:
        """Delete a product and every sale that references it.

        Deleting an id that does not exist is not an error.
        """
        async with self.database.transaction() as session:
            removed_sales = await session.execute(delete(Sale).where(Sale.product_id == product_id))
            await session.execute(delete(Product).where(Product.id == product_id))
        logger.info(f"Deleted product {product_id} and {removed_sales.rowcount} sale(s)")
