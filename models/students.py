from sqlalchemy import Column, Integer, String
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # student roster

    id = Column(Integer, primary_key=True, index=True)               # student ID (Primary Key)
    first_name = Column(String(100), nullable=False)                # first name
    last_name = Column(String(100), nullable=False)                 # last name
    student_number = Column(String(50), nullable=False)             # school-issued number (not enforced unique)
    year_level = Column(Integer, nullable=False, default=1)         # year level 1~4
    course = Column(String(100))                                    # course / program

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
