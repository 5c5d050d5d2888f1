from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Text
from shared.config.database import Base


class Grade(Base):
    __tablename__ = "grades"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # KES
    image = Column(String, nullable=True)
    publisher = Column(String, nullable=True)
    isbn = Column(String, nullable=False, unique=True)
    description = Column(Text, nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    grade_id = Column(Integer, ForeignKey("grades.id"), nullable=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
