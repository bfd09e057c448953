"""
Schema module initialization.
Exports all schema classes from submodules for convenient imports.
"""
from .auth import *
from .comment import *
from .pagination import *
from .post import *
