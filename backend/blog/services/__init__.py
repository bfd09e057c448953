"""
Services Module

Domain operations behind the REST routers. Each module exposes plain async
functions that take the acting user explicitly and raise blog.core.errors
failures:
- auth: register / login / logout / token verification
- users: current account update and deletion
- posts: post listing, creation and author-only mutation
- comments: threaded comments
- likes: one like per (post, user)
"""
