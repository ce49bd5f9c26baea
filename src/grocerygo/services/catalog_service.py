"""Catalog browsing service."""
from decimal import Decimal, InvalidOperation
from typing import Optional, List, Iterable, Mapping, Any, cast
from sqlalchemy import select, func

from grocerygo.config.settings import get_settings
from grocerygo.domain.pricing import CENT, to_money
from grocerygo.models import Grocery
from .base_service import BaseService, Result

ALL_CATEGORIES = "All"


class CatalogService(BaseService):
    """Service for reading and stocking the product catalog."""

    def add_grocery(
        self,
        name: str,
        category: str,
        price: Any,
        unit: Optional[str] = None,
        description: str = "",
        image_ref: str = "cart",
        image_name: Optional[str] = None
    ) -> Result[Grocery]:
        """
        Add a product to the catalog.

        Args:
            name: Product name
            category: Catalog category
            price: Unit price, must not be negative
            unit: Unit of sale (default: configured default unit)
            description: Free-text description
            image_ref: Symbolic image name
            image_name: Optional bundled image asset name

        Returns:
            Result containing the created grocery or error
        """
        name_result = self._validate_name(name)
        if not name_result.success:
            return cast(Result[Grocery], name_result)

        category_result = self._validate_name(category, field="Category")
        if not category_result.success:
            return cast(Result[Grocery], category_result)

        price_result = self._parse_price(price)
        if not price_result.success:
            return cast(Result[Grocery], price_result)
        money = price_result.data

        try:
            with self.transaction.transaction() as session:
                grocery = Grocery(
                    name=name_result.data,
                    category=category_result.data,
                    price=money,
                    unit=unit or get_settings().DEFAULT_UNIT,
                    description=description,
                    image_ref=image_ref,
                    image_name=image_name,
                )
                session.add(grocery)
                session.flush()

                self._log_action("add_grocery", grocery_id=grocery.id, grocery_name=grocery.name)

            self.session.refresh(grocery)
            return Result.ok(grocery)

        except Exception:
            self.logger.exception("Failed to add grocery")
            return Result.fail("Failed to add product to the catalog")

    def _parse_price(self, price: Any) -> Result[Decimal]:
        """Validate a price as a non-negative amount in whole cents."""
        try:
            money = to_money(price)
            cents = money.quantize(CENT)
        except (InvalidOperation, ValueError, TypeError):
            return Result.fail(f"Invalid price '{price}'")
        if not money.is_finite():
            return Result.fail(f"Invalid price '{price}'")
        if money < 0:
            return Result.fail("Price cannot be negative")
        if money != cents:
            return Result.fail(f"Price '{price}' must be in whole cents")
        return Result.ok(money)

    def get_grocery(self, grocery_id: int) -> Result[Grocery]:
        """Get a single catalog product by ID."""
        try:
            grocery = self.session.get(Grocery, grocery_id)
            if not grocery:
                return Result.fail("Product not found")
            return Result.ok(grocery)
        except Exception:
            self.logger.exception("Failed to get grocery")
            return Result.fail("Failed to load product")

    def list_groceries(
        self,
        category: Optional[str] = None,
        search_text: str = ""
    ) -> Result[List[Grocery]]:
        """
        List catalog products.

        Args:
            category: Only products in this category; None or "All" for every category
            search_text: Case-insensitive substring the name must contain

        Returns:
            Result containing products ordered by category, then name
        """
        try:
            query = select(Grocery)
            if category and category != ALL_CATEGORIES:
                query = query.where(Grocery.category == category)

            text = (search_text or "").strip()
            if text:
                query = query.where(
                    func.lower(Grocery.name).contains(text.lower(), autoescape=True)
                )

            query = query.order_by(Grocery.category, Grocery.name)
            groceries = list(self.session.execute(query).scalars().all())
            return Result.ok(groceries, count=len(groceries))

        except Exception:
            self.logger.exception("Failed to list groceries")
            return Result.fail("Failed to load the catalog")

    def get_categories(self) -> List[str]:
        """Category filter options, with "All" first."""
        return [ALL_CATEGORIES] + list(get_settings().CATALOG_CATEGORIES)

    def seed_catalog(self, entries: Iterable[Mapping[str, Any]]) -> Result[int]:
        """
        Insert catalog entries when the catalog is empty.

        Args:
            entries: Mappings with Grocery column values

        Returns:
            Result containing the number of products inserted
        """
        try:
            with self.transaction.transaction() as session:
                existing = session.execute(select(func.count(Grocery.id))).scalar_one()
                if existing:
                    self.logger.debug("Catalog already stocked", count=existing)
                    return Result.ok(0)

                count = 0
                for entry in entries:
                    values = dict(entry)
                    price_result = self._parse_price(values["price"])
                    if not price_result.success:
                        raise ValueError(f"{values.get('name')}: {price_result.error}")
                    values["price"] = price_result.data
                    session.add(Grocery(**values))
                    count += 1

                self._log_action("seed_catalog", count=count)
                return Result.ok(count)

        except Exception:
            self.logger.exception("Failed to seed catalog")
            return Result.fail("Failed to stock the catalog")
