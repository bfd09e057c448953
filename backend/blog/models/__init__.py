# blog/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: User account and authentication model
- Post: Blog post owned by a User
- Comment: Threaded comment on a Post (optional parent Comment)
- Like: A User's like on a Post, unique per pair
- RevokedToken: Access tokens invalidated by logout
"""
from .user import User
from .post import Post
from .comment import Comment
from .like import Like
from .revoked_token import RevokedToken
