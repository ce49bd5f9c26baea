"""Shopping list service."""
from dataclasses import dataclass, field
from typing import List, Optional, cast
from sqlalchemy import select

from grocerygo.config.settings import get_settings
from grocerygo.models import ShoppingListItem
from .base_service import BaseService, Result


@dataclass
class ShoppingListContents:
    """Shopping list split into what is still to buy and what is done."""
    active: List[ShoppingListItem] = field(default_factory=list)
    completed: List[ShoppingListItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.active) + len(self.completed)


class ShoppingListService(BaseService):
    """Service for the free-text shopping to-do list."""

    def add_item(self, name: str, category: Optional[str] = None) -> Result[ShoppingListItem]:
        """
        Add an entry to the shopping list.

        Args:
            name: What to buy
            category: Optional category label

        Returns:
            Result containing the created entry or error
        """
        name_result = self._validate_name(name, field="Item name")
        if not name_result.success:
            return cast(Result[ShoppingListItem], name_result)

        category = category.strip() if category and category.strip() else None

        try:
            with self.transaction.transaction() as session:
                item = ShoppingListItem(
                    name=name_result.data,
                    category=category,
                    date_added=self._get_now(),
                )
                session.add(item)
                session.flush()

                self._log_action("add_list_item", item_id=item.id, item_name=item.name)

            self.session.refresh(item)
            return Result.ok(item)

        except Exception:
            self.logger.exception("Failed to add shopping list item")
            return Result.fail("Failed to add item to the shopping list")

    def toggle_completed(self, item_id: int) -> Result[ShoppingListItem]:
        """Flip an entry between active and completed."""
        try:
            with self.transaction.transaction() as session:
                item = session.get(ShoppingListItem, item_id)
                if not item:
                    return Result.fail("Shopping list item not found")

                item.is_completed = not item.is_completed

                self._log_action(
                    "toggle_list_item",
                    item_id=item_id,
                    is_completed=item.is_completed
                )

            self.session.refresh(item)
            return Result.ok(item)

        except Exception:
            self.logger.exception("Failed to toggle shopping list item")
            return Result.fail("Failed to update the shopping list")

    def delete_item(self, item_id: int) -> Result[ShoppingListItem]:
        """Remove an entry from the shopping list."""
        try:
            with self.transaction.transaction() as session:
                item = session.get(ShoppingListItem, item_id)
                if not item:
                    return Result.fail("Shopping list item not found")

                session.delete(item)

                self._log_action("delete_list_item", item_id=item_id)
                return Result.ok(item)

        except Exception:
            self.logger.exception("Failed to delete shopping list item")
            return Result.fail("Failed to remove item from the shopping list")

    def get_items(self) -> Result[ShoppingListContents]:
        """Get the shopping list, newest entries first in each section."""
        try:
            items = self.session.execute(
                select(ShoppingListItem).order_by(
                    ShoppingListItem.date_added.desc(),
                    ShoppingListItem.id.desc()
                )
            ).scalars().all()

            contents = ShoppingListContents()
            for item in items:
                if item.is_completed:
                    contents.completed.append(item)
                else:
                    contents.active.append(item)
            return Result.ok(contents)

        except Exception:
            self.logger.exception("Failed to load shopping list")
            return Result.fail("Failed to load the shopping list")

    def get_categories(self) -> List[str]:
        return list(get_settings().SHOPPING_LIST_CATEGORIES)
