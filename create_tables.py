"""Create the FocusZen tables without running the API (local SQLite or DATABASE_URL)."""
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import inspect

from app.db.session import engine
from app.db.base import Base
from app import models  # noqa: F401 (registers every table with Base)

existing = set(inspect(engine).get_table_names())
print("Creating database tables...")
Base.metadata.create_all(bind=engine)
for table in sorted(Base.metadata.tables):
    print(f"  {table}{'' if table in existing else ' (new)'}")
print("✅ All tables created successfully!")
