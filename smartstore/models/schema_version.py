# smartstore/models/schema_version.py

from sqlalchemy import Column, Integer, String, text

from smartstore.database import Base


class SchemaVersion(Base):
    __tablename__ = "schema_version"

    version = Column(Integer, primary_key=True)
    applied_at = Column(String, nullable=False, server_default=text("(datetime('now', 'localtime'))"))
