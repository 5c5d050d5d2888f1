from contextlib import asynccontextmanager

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import NotFound, QueryFailure, ValidationError
from shared.observability.metrics import bookstore_catalog_queries_total

from .models import Category, Grade, Subject
from .query_builder import ProductFilters
from .repository import CatalogRepository
from .schemas import ProductUpdate, ProductUpsert

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def _datastore(db: AsyncSession, operation: str):
    """Translate datastore errors into QueryFailure / ValidationError."""
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        logger.warning("catalog_constraint_violation", operation=operation, error=str(e.orig))
        raise ValidationError(f"Product violates a catalog constraint: {e.orig}") from e
    except (SQLAlchemyError, OSError) as e:
        await db.rollback()
        logger.error("catalog_query_failed", operation=operation, error=str(e))
        raise QueryFailure(str(e)) from e


class CatalogService:

    @staticmethod
    async def list_grades(db: AsyncSession):
        async with _datastore(db, "list_grades"):
            return await CatalogRepository.list_lookup(db, Grade, Grade.id)

    @staticmethod
    async def list_subjects(db: AsyncSession):
        async with _datastore(db, "list_subjects"):
            return await CatalogRepository.list_lookup(db, Subject, Subject.name)

    @staticmethod
    async def list_categories(db: AsyncSession):
        async with _datastore(db, "list_categories"):
            return await CatalogRepository.list_lookup(db, Category, Category.name)

    @staticmethod
    async def list_products(db: AsyncSession, filters: ProductFilters):
        try:
            async with _datastore(db, "list_products"):
                products = await CatalogRepository.list_products(db, filters)
        except QueryFailure:
            bookstore_catalog_queries_total.labels(outcome="error").inc()
            raise

        bookstore_catalog_queries_total.labels(outcome="ok" if products else "empty").inc()
        logger.info(
            "catalog_query",
            grade_ids=filters.grade_ids,
            subject_ids=filters.subject_ids,
            category_ids=filters.category_ids,
            sort=filters.sort,
            page=filters.page,
            limit=filters.limit,
            count=len(products),
        )
        return products

    @staticmethod
    async def get_product(db: AsyncSession, product_id: int):
        async with _datastore(db, "get_product"):
            product = await CatalogRepository.get_product(db, product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    @staticmethod
    async def upsert_product(db: AsyncSession, data: ProductUpsert):
        async with _datastore(db, "upsert_product"):
            product_id = await CatalogRepository.upsert_product(db, data.model_dump())
        logger.info("product_upserted", product_id=product_id, isbn=data.isbn)
        return await CatalogService.get_product(db, product_id)

    @staticmethod
    async def update_product(db: AsyncSession, product_id: int, data: ProductUpdate):
        async with _datastore(db, "update_product"):
            updated_id = await CatalogRepository.update_product(db, product_id, data.model_dump())
        if updated_id is None:
            raise NotFound("Product not found")
        logger.info("product_updated", product_id=product_id)
        return await CatalogService.get_product(db, product_id)
