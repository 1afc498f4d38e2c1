from forum.models.dao.base import BaseDao
from forum.models.user.models import User


class UsersDAO(BaseDao):
    model = User
