"""
Catalog listing query construction.

A listing request is an open set of optional filters. ``ProductFilters``
holds them as typed, already-parsed values and ``build_product_query``
folds over the present ones in a fixed order (grade, subject, category,
min_price, max_price, search), appending one bound predicate each. No
request value is ever rendered into the SQL text.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from sqlalchemy import Select, func, or_, select

from .models import Category, Grade, Product, Subject

SortOrder = Literal["price_low", "price_high", "newest"]

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

FALLBACK_GRADE = "All Grades"
FALLBACK_SUBJECT = "All Subjects"
FALLBACK_CATEGORY = "Books"


def parse_id_list(raw: str | None) -> list[int]:
    """Parse ``"3, 4,x,0"`` into ``[3, 4]``.

    Tokens that are not positive integers are dropped silently.
    """
    if not raw:
        return []
    ids = []
    for token in raw.split(","):
        token = token.strip()
        # isdigit() alone accepts digits like "²" that int() rejects
        if token.isascii() and token.isdigit() and int(token) > 0:
            ids.append(int(token))
    return ids


@dataclass
class ProductFilters:
    grade_ids: list[int] = field(default_factory=list)
    subject_ids: list[int] = field(default_factory=list)
    category_ids: list[int] = field(default_factory=list)
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    search: str | None = None
    sort: SortOrder = "newest"
    page: int = DEFAULT_PAGE
    limit: int | None = DEFAULT_LIMIT

    @classmethod
    def from_query(
        cls,
        grade_ids: str | None = None,
        subject_ids: str | None = None,
        category_ids: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        search: str | None = None,
        sort: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> "ProductFilters":
        return cls(
            grade_ids=parse_id_list(grade_ids),
            subject_ids=parse_id_list(subject_ids),
            category_ids=parse_id_list(category_ids),
            min_price=min_price,
            max_price=max_price,
            search=search.strip() if search and search.strip() else None,
            sort=sort if sort in ("price_low", "price_high") else "newest",
            page=max(1, page or DEFAULT_PAGE),
            limit=max(1, limit) if limit else DEFAULT_LIMIT,
        )

    @property
    def offset(self) -> int:
        if self.limit is None:
            return 0
        return (self.page - 1) * self.limit


def product_listing_select() -> Select:
    """Products joined with their grade, subject and category names.

    Missing lookups resolve to a fallback label instead of null.
    """
    return (
        select(
            *Product.__table__.columns,
            func.coalesce(Grade.name, FALLBACK_GRADE).label("grade_name"),
            func.coalesce(Subject.name, FALLBACK_SUBJECT).label("subject_name"),
            func.coalesce(Category.name, FALLBACK_CATEGORY).label("category_name"),
        )
        .outerjoin(Grade, Product.grade_id == Grade.id)
        .outerjoin(Subject, Product.subject_id == Subject.id)
        .outerjoin(Category, Product.category_id == Category.id)
    )


def _predicates(filters: ProductFilters) -> list:
    predicates = []
    if filters.grade_ids:
        predicates.append(Product.grade_id.in_(filters.grade_ids))
    if filters.subject_ids:
        predicates.append(Product.subject_id.in_(filters.subject_ids))
    if filters.category_ids:
        predicates.append(Product.category_id.in_(filters.category_ids))
    # min > max is not rejected, it just matches nothing
    if filters.min_price is not None:
        predicates.append(Product.price >= filters.min_price)
    if filters.max_price is not None:
        predicates.append(Product.price <= filters.max_price)
    if filters.search:
        predicates.append(
            or_(
                Product.title.icontains(filters.search, autoescape=True),
                Product.description.icontains(filters.search, autoescape=True),
            )
        )
    return predicates


def _ordering(sort: SortOrder) -> tuple:
    # id DESC breaks ties so offset pages never overlap
    if sort == "price_low":
        return (Product.price.asc(), Product.id.desc())
    if sort == "price_high":
        return (Product.price.desc(), Product.id.desc())
    return (Product.id.desc(),)


def build_product_query(filters: ProductFilters) -> Select:
    stmt = product_listing_select().where(*_predicates(filters)).order_by(*_ordering(filters.sort))
    if filters.limit is not None:
        stmt = stmt.limit(filters.limit).offset(filters.offset)
    return stmt


def build_product_by_id_query(product_id: int) -> Select:
    return product_listing_select().where(Product.id == product_id)
