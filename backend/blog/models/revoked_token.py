# blog/models/revoked_token.py
from tortoise import fields, models


class RevokedToken(models.Model):
    """
    Revocation set for access tokens invalidated by logout.
    - jti: the token's unique ID claim (the token itself is not stored)
    - expires_at: the token's own expiry; rows past it can be purged because
      the signature check already rejects the token
    Kept in the database so every worker sees the same set.
    """
    id = fields.IntField(pk=True)
    jti = fields.CharField(max_length=64, unique=True, index=True)
    user = fields.ForeignKeyField("models.User", related_name="revoked_tokens", on_delete=fields.CASCADE)
    expires_at = fields.DatetimeField()
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "revoked_tokens"
