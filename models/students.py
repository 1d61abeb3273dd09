from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, func
from sqlalchemy.orm import relationship
from database.db import Base


class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 + 학업/위험도 요약 테이블

    id = Column(Integer, primary_key=True, index=True)                 # 고유 학생 ID (Primary Key)

    # ✅ 신원 정보 (등록 시 설정, 성적/출결 처리에서 변경하지 않음)
    name = Column(String(100), nullable=False)                         # 학생 이름
    email = Column(String(200), nullable=False, unique=True)           # 이메일 (소문자 저장)
    roll_no = Column(String(50), nullable=False, unique=True)          # 학번
    department = Column(String(100), nullable=False)                   # 학과
    program = Column(String(100), nullable=False)                      # 과정 (예: B.Tech)
    batch = Column(String(20), nullable=False)                         # 입학 연도/기수
    semester = Column(Integer, nullable=False, default=1)              # 현재 학기
    section = Column(String(20), nullable=False)                       # 분반

    # ✅ 출결 누계
    total_classes = Column(Integer, nullable=False, default=0)         # 전체 수업 수
    attended_classes = Column(Integer, nullable=False, default=0)      # 출석 수업 수
    attendance_percentage = Column(Float, nullable=False, default=0)   # 출석률 (소수 둘째 자리)

    # ✅ 학업 요약 (학기 성적 업로드 시 재계산)
    cgpa = Column(Float, nullable=False, default=0)
    current_backlogs = Column(Integer, nullable=False, default=0)
    total_backlogs_ever = Column(Integer, nullable=False, default=0)

    # ✅ 위험도
    is_at_risk = Column(Boolean, nullable=False, default=False)
    risk_level = Column(String(10), nullable=False, default="Low")     # Low / Medium / High / Critical
    risk_score = Column(Integer, nullable=False, default=0)            # 0 ~ 100

    fee_pending = Column(Boolean, nullable=False, default=False)       # 등록금 미납 여부

    version = Column(Integer, nullable=False, default=0)               # 낙관적 잠금 버전
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # ✅ 관계 설정: 학기 기록 / 경고 기록
    academics = relationship(
        "SemesterRecord",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="SemesterRecord.semester",
    )
    warnings = relationship(
        "StudentWarning",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="StudentWarning.id",
    )
