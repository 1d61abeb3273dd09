from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from database.db import Base


# ✅ 교사가 남긴 학생 경고 기록
class StudentWarning(Base):
    __tablename__ = "student_warnings"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, server_default=func.now())  # 경고 일시
    reason = Column(String(500), nullable=False)                          # 경고 사유
    given_by = Column(String(50), nullable=True)                          # 경고를 남긴 역할/교사

    student = relationship("Student", back_populates="warnings")
