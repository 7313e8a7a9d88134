import asyncio
import logging
from contextlib import asynccontextmanager
from decimal import Decimal

from sqlalchemy import select, update

from shopledger.config import Config
from shopledger.db.database import Database, db
from shopledger.errors import ErrorType
from shopledger.exceptions import AppException
from shopledger.models import Product, Sale

logger = logging.getLogger(__name__)


def compute_sale_amounts(product: Product, quantity: int) -> tuple[Decimal, Decimal]:
    """Return (total_amount, profit) for selling ``quantity`` at the product's current prices."""
    selling_price = Decimal(product.selling_price)
    cost_price = Decimal(product.cost_price)
    total_amount = selling_price * quantity
    profit = (selling_price - cost_price) * quantity
    return total_amount, profit


def validate_sale_request(product_id, quantity):
    """Raise VALIDATION_ERROR unless both ids and quantity are positive integers."""
    for field, value in (("product_id", product_id), ("quantity", quantity)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise AppException(ErrorType.VALIDATION_ERROR, f"{field} must be an integer")
        if value <= 0:
            raise AppException(ErrorType.VALIDATION_ERROR, f"{field} must be greater than 0")


class SaleRecorder:
    """Records a sale and decrements stock as one atomic unit.

    The product read, sale insert and stock update share a transaction, so a
    sale never exists without its stock decrement. Sales on the same product
    are serialized twice over: an in-process lock per product id, and a row
    lock (SELECT ... FOR UPDATE) for other processes on engines that have one.
    """

    def __init__(
        self,
        database: Database,
        allow_negative_stock: bool | None = None,
        timeout: float | None = None,
    ):
        self.database = database
        self.allow_negative_stock = (
            Config.ALLOW_NEGATIVE_STOCK if allow_negative_stock is None else allow_negative_stock
        )
        self.timeout = Config.SALE_TIMEOUT_SECONDS if timeout is None else timeout
        # Entries live only while a sale on that product holds or awaits the lock
        self._locks: dict[int, asyncio.Lock] = {}
        self._lock_users: dict[int, int] = {}

    @asynccontextmanager
    async def _product_lock(self, product_id: int):
        lock = self._locks.setdefault(product_id, asyncio.Lock())
        self._lock_users[product_id] = self._lock_users.get(product_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[product_id] -= 1
            if not self._lock_users[product_id]:
                del self._lock_users[product_id]
                del self._locks[product_id]

    async def record_sale(self, product_id: int, quantity: int) -> Sale:
        """Record a sale of ``quantity`` units of ``product_id``.

        Raises:
            AppException: VALIDATION_ERROR, NOT_FOUND, INSUFFICIENT_STOCK,
                STORE_ERROR or TIMEOUT. Nothing is written in any of these cases.
        """
        validate_sale_request(product_id, quantity)
        try:
            return await asyncio.wait_for(self._record(product_id, quantity), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Sale of product {product_id} timed out after {self.timeout}s")
            raise AppException(ErrorType.TIMEOUT, "Sale recording timed out")

    async def _record(self, product_id: int, quantity: int) -> Sale:
        async with self._product_lock(product_id):
            async with self.database.transaction() as session:
                result = await session.execute(
                    select(Product).where(Product.id == product_id).with_for_update()
                )
                product = result.scalar_one_or_none()
                if product is None:
                    raise AppException(ErrorType.NOT_FOUND, "Product not found")

                if not self.allow_negative_stock and product.stock_quantity < quantity:
                    raise AppException(
                        ErrorType.INSUFFICIENT_STOCK,
                        f"Insufficient stock for {product.name}: "
                        f"{product.stock_quantity} available, {quantity} requested"
                    )

                total_amount, profit = compute_sale_amounts(product, quantity)
                sale = Sale(
                    product_id=product_id,
                    quantity=quantity,
                    total_amount=total_amount,
                    profit=profit,
                )
                session.add(sale)

                await session.execute(
                    update(Product)
                    .where(Product.id == product_id)
                    .values(stock_quantity=Product.stock_quantity - quantity)
                )
                await session.flush()
                await session.refresh(sale)

        logger.info(
            f"Recorded sale {sale.id}: product={product_id} qty={quantity} "
            f"total={total_amount} profit={profit}"
        )
        return sale


sale_recorder = SaleRecorder(db)


def get_sale_recorder() -> SaleRecorder:
    """FastAPI dependency; one recorder per process so the product locks are shared."""
    return sale_recorder
