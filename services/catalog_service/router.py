from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security.dependencies import require_admin

from .query_builder import DEFAULT_LIMIT, ProductFilters
from .schemas import AdminProductResponse, LookupResponse, ProductResponse, ProductUpdate, ProductUpsert
from .service import CatalogService

router = APIRouter(tags=["Catalog"])
admin_router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/grades", response_model=list[LookupResponse])
async def list_grades(db: AsyncSession = Depends(get_db)):
    return await CatalogService.list_grades(db)


@router.get("/subjects", response_model=list[LookupResponse])
async def list_subjects(db: AsyncSession = Depends(get_db)):
    return await CatalogService.list_subjects(db)


@router.get("/categories", response_model=list[LookupResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await CatalogService.list_categories(db)


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    grade_ids: str | None = Query(default=None),
    subject_ids: str | None = Query(default=None),
    category_ids: str | None = Query(default=None),
    min_price: Decimal | None = Query(default=None),
    max_price: Decimal | None = Query(default=None),
    search: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    filters = ProductFilters.from_query(
        grade_ids=grade_ids,
        subject_ids=subject_ids,
        category_ids=category_ids,
        min_price=min_price,
        max_price=max_price,
        search=search,
        sort=sort,
        page=page,
        limit=limit,
    )
    return await CatalogService.list_products(db, filters)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    return await CatalogService.get_product(db, product_id)


@router.put("/products/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def update_product(product_id: int, product: ProductUpdate, db: AsyncSession = Depends(get_db)):
    return await CatalogService.update_product(db, product_id, product)


@admin_router.post("/products", response_model=AdminProductResponse)
async def upsert_product(product: ProductUpsert, db: AsyncSession = Depends(get_db)):
    """Insert a product, or update title/price/stock when the ISBN already exists."""
    saved = await CatalogService.upsert_product(db, product)
    return AdminProductResponse(product=saved)
