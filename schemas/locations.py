from typing import Optional
from pydantic import BaseModel, ConfigDict

class LocationCreate(BaseModel):
    name: str                               # 지점/학교 이름
    address: Optional[str] = None           # 주소

class Location(LocationCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
