from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import Optional

# ✅ input: POST / PUT body
class SubjectCreate(BaseModel):
    subject_code: Optional[str] = None       # subject code (required)
    subject_name: Optional[str] = None       # subject name (required)
    instructor: Optional[str] = None         # instructor (required)

# ✅ output: GET / POST responses
class Subject(BaseModel):
    id: int                                  # subject ID
    subject_code: str
    subject_name: str
    instructor: str
    created_at: Optional[datetime] = None    # newest-first ordering key

    model_config = ConfigDict(from_attributes=True)
