# /app/db/models/generation_models.py

from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from ..base_class import Base

# SQLite keeps the file list as serialized JSON text; PostgreSQL stores it natively.
# The repositories in services/database_helpers own the conversion for each backend.
GeneratedCodeType = Text().with_variant(JSONB(), "postgresql")


class CodeGeneration(Base):
    __tablename__ = "code_generations"
    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)
    prompt = Column(Text, nullable=False)
    language = Column(String, nullable=False)
    framework = Column(String, nullable=True)
    generated_code = Column(GeneratedCodeType, nullable=False)
    explanation = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), index=True, nullable=False)
