"""
Archive adapters.
"""

from .zip_writer import ZipArchiveWriter

__all__ = ["ZipArchiveWriter"]
