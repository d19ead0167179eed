"""
Adapters implementing the storage ports.
"""
