from decimal import Decimal

from pydantic import BaseModel, Field


class LookupResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ProductBase(BaseModel):
    title: str = Field(min_length=1)
    price: Decimal = Field(ge=0)  # KES
    image: str | None = None
    publisher: str | None = None
    isbn: str = Field(min_length=1)
    description: str | None = None
    stock: int = Field(default=0, ge=0)
    grade_id: int | None = None
    subject_id: int | None = None
    category_id: int | None = None


class ProductUpsert(ProductBase):
    pass


class ProductUpdate(ProductBase):
    pass


class ProductResponse(ProductBase):
    id: int
    grade_name: str
    subject_name: str
    category_name: str

    class Config:
        from_attributes = True


class AdminProductResponse(BaseModel):
    success: bool = True
    product: ProductResponse
