# blog/models/post.py
"""
Database model for blog posts.
"""
from tortoise import fields, models


class Post(models.Model):
    """
    Post database model.

    Owned by its author; only the author may update or delete it.
    Comments and likes reference the post with ON DELETE CASCADE.
    """
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="posts",
        on_delete=fields.CASCADE
    )  # Author; deleting the user deletes their posts
    title = fields.CharField(max_length=255)
    body = fields.TextField()
    created_at = fields.DatetimeField(auto_now_add=True, index=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "posts"
