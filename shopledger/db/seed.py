import asyncio
import random
from decimal import Decimal
from sqlalchemy import select
from shopledger.db.database import db
from shopledger.errors import ErrorType
from shopledger.exceptions import AppException
from shopledger.models import Product
from shopledger.services.sale_service import SaleRecorder


# Sample products: name, unit, cost price, selling price, opening stock
PRODUCTS_DATA = [
    ("Rice", "kg", Decimal("10.00"), Decimal("15.00"), 100),
    ("Sugar", "kg", Decimal("8.50"), Decimal("11.00"), 80),
    ("Cooking Oil", "litre", Decimal("22.00"), Decimal("27.50"), 40),
    ("Flour", "kg", Decimal("6.00"), Decimal("8.25"), 120),
    ("Tea Leaves", "pack", Decimal("4.75"), Decimal("7.00"), 60),
    ("Eggs", "tray", Decimal("18.00"), Decimal("21.00"), 25),
    ("Soap", "bar", Decimal("1.20"), Decimal("2.00"), 200),
    ("Matches", "box", Decimal("0.30"), Decimal("0.50"), 300),
]


async def seed_database(sales_count: int = 50):
    await db.init_schema()

    async with db.transaction() as session:
        # Check if data exists
        result = await session.execute(select(Product).limit(1))
        if result.scalar():
            print("Database already seeded")
            return

        products = []
        for name, unit, cost_price, selling_price, stock in PRODUCTS_DATA:
            product = Product(
                name=name,
                unit=unit,
                cost_price=cost_price,
                selling_price=selling_price,
                stock_quantity=stock
            )
            products.append(product)
            session.add(product)

        await session.flush()  # Get IDs
        product_ids = [p.id for p in products]

    # Sales go through the recorder so stock stays consistent
    recorder = SaleRecorder(db, allow_negative_stock=False)
    for _ in range(sales_count):
        try:
            await recorder.record_sale(random.choice(product_ids), random.randint(1, 3))
        except AppException as e:
            if e.error_type != ErrorType.INSUFFICIENT_STOCK:
                raise

    print("Database seeded successfully!")


async def main():
    try:
        await seed_database()
    finally:
        await db.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
