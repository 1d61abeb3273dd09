import csv
import logging
import sys
from typing import Optional

from sqlalchemy.orm import Session
from database.db import SessionLocal
from models import academics, students, warnings  # noqa: F401  ✅ 관계 매핑을 위해 모두 import
from schemas.students import StudentCreate
from services.errors import Conflict
from services.student_service import register_student

logger = logging.getLogger(__name__)

CSV_PATH = "data/students.csv"  # ✅ 파일 경로

# CSV 컬럼: name,email,roll_no,department,program,batch,semester,section[,fee_pending]


def _to_bool(value: Optional[str]) -> bool:
    return str(value or "").strip().lower() in ("1", "true", "yes", "y")


def migrate_students(csv_path: str = CSV_PATH, db: Optional[Session] = None) -> dict:
    """CSV → students 테이블. 이미 등록된 이메일/학번은 건너뛰고 개수를 돌려준다"""
    own_session = db is None
    db = db or SessionLocal()
    created, skipped = 0, 0

    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
            reader = csv.DictReader(csvfile)
            for row in reader:
                data = StudentCreate(
                    name=row["name"],                          # 학생 이름
                    email=row["email"],                        # 이메일
                    roll_no=row["roll_no"],                    # 학번
                    department=row["department"],              # 학과
                    program=row["program"],                    # 과정
                    batch=row["batch"],                        # 입학 기수
                    semester=int(row.get("semester") or 1),    # 현재 학기
                    section=row["section"],                    # 분반
                    fee_pending=_to_bool(row.get("fee_pending")),
                )
                try:
                    register_student(db, data)
                    created += 1
                except Conflict as e:
                    logger.warning(f"건너뜀 (roll_no={data.roll_no}): {e.message}")
                    skipped += 1
    finally:
        if own_session:
            db.close()

    print(f"✅ 학생 정보 CSV → DB 마이그레이션 완료 (추가 {created}건, 건너뜀 {skipped}건)")
    return {"created": created, "skipped": skipped}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    migrate_students(sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
