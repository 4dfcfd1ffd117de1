"""
Adapter layer for the Files Manager API.

Contains the Redis session cache client and the local content store.
"""
