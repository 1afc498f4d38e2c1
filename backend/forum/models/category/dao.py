from forum.models.category.models import Category
from forum.models.dao.base import BaseDao


class CategoryDAO(BaseDao):
    model = Category
