from dataclasses import dataclass, field
from decimal import Decimal

FILTER_KINDS = ("grades", "subjects", "categories")


@dataclass
class CatalogFilters:
    """Browsing state of the catalog page, rendered as listing query parameters."""
    grades: list[int] = field(default_factory=list)
    subjects: list[int] = field(default_factory=list)
    categories: list[int] = field(default_factory=list)
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    search: str = ""
    sort: str = "newest"
    page: int = 1
    limit: int = 20

    def toggle(self, kind: str, value: int):
        """Add ``value`` to the grade/subject/category set, or drop it if present."""
        if kind not in FILTER_KINDS:
            raise ValueError(f"Unknown filter kind: {kind}")
        selected = getattr(self, kind)
        if value in selected:
            selected.remove(value)
        else:
            selected.append(value)
        self.page = 1

    def set_price_range(self, min_price: Decimal | None, max_price: Decimal | None):
        self.min_price, self.max_price = min_price, max_price
        self.page = 1

    def set_search(self, text: str):
        self.search = text
        self.page = 1

    def set_sort(self, sort: str):
        self.sort = sort
        self.page = 1

    def next_page(self):
        self.page += 1

    def previous_page(self):
        self.page = max(1, self.page - 1)

    def reset(self):
        self.__init__(limit=self.limit)

    def to_params(self) -> dict[str, str]:
        params = {"page": str(self.page), "limit": str(self.limit)}
        if self.grades:
            params["grade_ids"] = ",".join(map(str, self.grades))
        if self.subjects:
            params["subject_ids"] = ",".join(map(str, self.subjects))
        if self.categories:
            params["category_ids"] = ",".join(map(str, self.categories))
        if self.min_price is not None:
            params["min_price"] = str(self.min_price)
        if self.max_price is not None:
            params["max_price"] = str(self.max_price)
        if self.search.strip():
            params["search"] = self.search.strip()
        if self.sort in ("price_low", "price_high"):
            params["sort"] = self.sort
        return params
