# Import every model so SQLAlchemy can resolve string relationships.
from forum.models.user.models import User
from forum.models.category.models import Category
from forum.models.thread.models import Thread
from forum.models.post.models import Post
from forum.models.thread_read.models import ThreadRead

__all__ = ["User", "Category", "Thread", "Post", "ThreadRead"]
