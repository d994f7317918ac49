from .subject import Subject
from .item import StudyItem, ItemProgress

__all__ = [
    "Subject",
    "StudyItem",
    "ItemProgress",
]
