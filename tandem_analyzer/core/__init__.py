"""
Core domain layer: dataset records, user settings and the exception
hierarchy
"""

from .dataset_record import DatasetRecord, record_from_dict, record_to_dict
from .settings import Settings, StorageType

__all__ = ["DatasetRecord", "record_from_dict", "record_to_dict", "Settings", "StorageType"]
