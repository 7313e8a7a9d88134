from fastapi import APIRouter, Depends, Path

from shopledger.db.database import Database, get_db
from shopledger.schemas.product import ProductIn, ProductOut, SuccessResponse
from shopledger.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


def get_product_service(database: Database = Depends(get_db)) -> ProductService:
    return ProductService(database)


@router.get("", response_model=list[ProductOut])
async def list_products(service: ProductService = Depends(get_product_service)):
    return await service.list_products()


@router.post("", response_model=ProductOut)
async def create_product(body: ProductIn, service: ProductService = Depends(get_product_service)):
    return await service.create_product(body)


@router.put("/{product_id}", response_model=ProductOut)
async def update_product(
    body: ProductIn,
    product_id: int = Path(gt=0),
    service: ProductService = Depends(get_product_service),
):
    return await service.update_product(product_id, body)


@router.delete("/{product_id}", response_model=SuccessResponse)
async def delete_product(
    product_id: int = Path(gt=0),
    service: ProductService = Depends(get_product_service),
):
    """Deletes the product together with its sales."""
    await service.delete_product(product_id)
    return SuccessResponse()
