from decimal import Decimal

from sqlalchemy import func, select

from shopledger.models import Product, Sale


async def add_product(database, name, cost_price, selling_price, stock_quantity, unit="kg"):
    async with database.transaction() as session:
        product = Product(
            name=name,
            unit=unit,
            cost_price=Decimal(str(cost_price)),
            selling_price=Decimal(str(selling_price)),
            stock_quantity=stock_quantity
        )
        session.add(product)
        await session.flush()
    return product


async def stock_of(database, product_id):
    async with database.session() as session:
        product = await session.get(Product, product_id)
        return product.stock_quantity if product else None


async def sale_count(database):
    async with database.session() as session:
        result = await session.execute(select(func.count(Sale.id)))
        return result.scalar_one()
