from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer, String
from database.db import Base

def _utcnow():
    return datetime.now(timezone.utc)

class Subject(Base):
    __tablename__ = "subjects"  # subject catalogue

    id = Column(Integer, primary_key=True, index=True)         # subject ID (Primary Key)
    subject_code = Column(String(20), nullable=False)          # subject code (e.g. MATH101)
    subject_name = Column(String(100), nullable=False)         # subject name (e.g. Mathematics)
    instructor = Column(String(100), nullable=False)           # instructor in charge
    created_at = Column(DateTime, nullable=False, default=_utcnow)  # used for newest-first listing
