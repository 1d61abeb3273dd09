from sqlalchemy import Column, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base


# ✅ 학생별 학기 성적 기록 (학생 1명당 학기 번호별 1건)
class SemesterRecord(Base):
    __tablename__ = "semester_records"
    __table_args__ = (UniqueConstraint("student_id", "semester", name="uq_student_semester"),)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    semester = Column(Integer, nullable=False)                  # 학기 번호 (1~10)
    sgpa = Column(Float, nullable=False, default=0)             # 학기 평점
    total_credits = Column(Integer, nullable=False, default=0)  # 신청 학점
    earned_credits = Column(Integer, nullable=False, default=0) # 취득 학점 (평점 > 0 과목)
    backlogs_this_sem = Column(Integer, nullable=False, default=0)

    student = relationship("Student", back_populates="academics")
    subjects = relationship(
        "SubjectRecord",
        back_populates="semester_record",
        cascade="all, delete-orphan",
        order_by="SubjectRecord.position",
    )


# ✅ 학기 기록의 과목별 성적
class SubjectRecord(Base):
    __tablename__ = "subject_results"

    id = Column(Integer, primary_key=True, index=True)
    semester_record_id = Column(
        Integer, ForeignKey("semester_records.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)       # 업로드 순서 유지용
    subject_name = Column(String(200), nullable=False)          # 과목명
    subject_code = Column(String(50), nullable=False)           # 과목 코드
    credits = Column(Integer, nullable=False)                   # 학점
    grade = Column(String(5), nullable=False)                   # 등급 (O, A+, ..., F, Ab)
    grade_points = Column(Integer, nullable=False)              # 등급 평점 (항상 서버에서 계산)
    marks = Column(Float, nullable=True)                        # 원점수 (선택)

    semester_record = relationship("SemesterRecord", back_populates="subjects")
