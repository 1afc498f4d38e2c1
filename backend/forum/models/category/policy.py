"""Category visibility rules used when listing threads for a reader."""

from typing import Optional, Protocol

from forum.models.category.models import Category
from forum.models.user.models import User


class CategoryAccessPolicy(Protocol):
    def can_view(self, user: Optional[User], category: Category) -> bool: ...


class DefaultCategoryPolicy:
    """Public categories are visible to everyone, private ones to signed-in users only."""

    def can_view(self, user: Optional[User], category: Category) -> bool:
        if not category.private:
            return True
        return user is not None
