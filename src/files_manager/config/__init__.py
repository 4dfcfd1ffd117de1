"""
Configuration management for the Files Manager API.

Contains the Pydantic settings class and a cached accessor.
"""
