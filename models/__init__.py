"""
Persistence package: SQLAlchemy models and the process-wide DBStorage.
create_app() calls storage.reload() with the configured DATABASE_URL.
"""
from models.db_storage import DBStorage

storage = DBStorage()
