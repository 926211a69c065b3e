from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Optional

# ✅ input (POST/PUT); blank required fields are reported by the service layer
class StudentCreate(BaseModel):
    first_name: Optional[str] = None                    # first name (required)
    last_name: Optional[str] = None                     # last name (required)
    student_number: Optional[str] = None                # student number (required)
    year_level: int = Field(1, ge=1, le=4)              # year level 1~4
    course: Optional[str] = None                        # course / program

# ✅ output (GET, detail)
class Student(BaseModel):
    id: int
    first_name: str
    last_name: str
    student_number: str
    year_level: int = 1
    course: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[misc]
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
