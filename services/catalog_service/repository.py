from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Product
from .query_builder import ProductFilters, build_product_by_id_query, build_product_query

# Fields an ISBN conflict overwrites; everything else keeps its stored value
UPSERT_FIELDS = ("title", "price", "stock")


def _dialect_insert(db: AsyncSession):
    if db.get_bind().dialect.name == "sqlite":
        return sqlite.insert
    return postgresql.insert


class CatalogRepository:

    @staticmethod
    async def list_lookup(db: AsyncSession, model, order_by):
        result = await db.execute(select(model).order_by(order_by))
        return result.scalars().all()

    @staticmethod
    async def list_products(db: AsyncSession, filters: ProductFilters):
        result = await db.execute(build_product_query(filters))
        return [dict(row) for row in result.mappings()]

    @staticmethod
    async def get_product(db: AsyncSession, product_id: int):
        result = await db.execute(build_product_by_id_query(product_id))
        row = result.mappings().first()
        return dict(row) if row is not None else None

    @staticmethod
    async def upsert_product(db: AsyncSession, values: dict) -> int:
        insert = _dialect_insert(db)
        stmt = insert(Product).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Product.isbn],
            set_={name: getattr(stmt.excluded, name) for name in UPSERT_FIELDS},
        ).returning(Product.id)
        result = await db.execute(stmt)
        product_id = result.scalar_one()
        await db.commit()
        return product_id

    @staticmethod
    async def update_product(db: AsyncSession, product_id: int, values: dict) -> int | None:
        result = await db.execute(
            update(Product).where(Product.id == product_id).values(**values).returning(Product.id)
        )
        updated_id = result.scalar_one_or_none()
        await db.commit()
        return updated_id
