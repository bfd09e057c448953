# blog/models/like.py
from tortoise import fields, models


class Like(models.Model):
    """
    A user's like on a post.
    - (post, user) is unique: the database rejects a second like, which is
      what serializes concurrent like requests for the same pair
    """
    id = fields.IntField(pk=True)
    post = fields.ForeignKeyField("models.Post", related_name="likes", on_delete=fields.CASCADE)
    user = fields.ForeignKeyField("models.User", related_name="likes", on_delete=fields.CASCADE)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "likes"
        unique_together = (("post", "user"),)
