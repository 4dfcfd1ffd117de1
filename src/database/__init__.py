"""
Document store layer.

Wraps MongoDB collections behind a small adapter so services never talk to
pymongo directly.
"""

from .mongo_adapter import MongoAdapter

__all__ = ['MongoAdapter']
