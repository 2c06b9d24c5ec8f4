"""
Column types shared by the models.

DomainTagList is the storage boundary for domain tags: Python code always
sees a list of strings, the database always holds a JSON array as text.
"""

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

from core.matching.tags import decode_tags, encode_tags


class DomainTagList(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return encode_tags(value)

    def process_result_value(self, value, dialect):
        return decode_tags(value)
