# blog/models/comment.py
"""
Database model for threaded comments.
A comment without parent is top-level; a reply points to another comment of the same post.
"""
from tortoise import fields, models


class Comment(models.Model):
    id = fields.IntField(pk=True)
    post = fields.ForeignKeyField("models.Post", related_name="comments", on_delete=fields.CASCADE)
    user = fields.ForeignKeyField("models.User", related_name="comments", on_delete=fields.CASCADE)

    # Deleting a comment removes its whole reply subtree
    parent = fields.ForeignKeyField(
        "models.Comment",
        related_name="replies",
        null=True,
        on_delete=fields.CASCADE,
    )

    body = fields.TextField()
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "comments"
