from sqlalchemy import Column, Integer, String
from database.db import Base

class Location(Base):
    __tablename__ = "locations"  # 지점/협력 학교 프리셋

    id = Column(Integer, primary_key=True, index=True)     # 지점 고유 ID
    name = Column(String(150), nullable=False, unique=True)  # 지점/학교 이름
    address = Column(String(255))                          # 주소
