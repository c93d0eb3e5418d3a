"""Custom SQLAlchemy column types shared by the Shiplog models"""
from sqlalchemy import TypeDecorator, String
import uuid


def generate_uuid() -> str:
    """New primary key value for items and categories"""
    return str(uuid.uuid4())


class GUID(TypeDecorator):
    """UUID stored as VARCHAR(36) so SQLite and PostgreSQL behave the same"""
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return str(value) if value is not None else None

    def process_result_value(self, value, dialect):
        return str(value) if value is not None else None
