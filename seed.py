from database import SessionLocal, engine, Base
from models.students import Student
from models.payments import Payment, billing_month_of
from models.system import AcademySetting, DEFAULT_SETTINGS
from services.fee_defaults import standard_fee
from datetime import date

# Creates the tables if they are missing
Base.metadata.create_all(bind=engine)

# Database Connection
db = SessionLocal()

def seed_data():
    print("Seeding academy data...")

    # 1. ACADEMY SETTINGS (grade-tier default fees)
    settings = dict(DEFAULT_SETTINGS)
    settings.update({
        "academy_name": "Demo Math Academy",
        "fee_elementary": "250000",
        "fee_middle": "300000",
        "fee_high": "350000",
    })
    for key, value in settings.items():
        exists = db.query(AcademySetting).filter_by(key=key).first()
        if not exists:
            db.add(AcademySetting(key=key, value=value))
            print(f"  Setting {key} = {value}")
    db.commit()

    # 2. STUDENTS (fee 0 -> tier default)
    students = [
        {"name": "Kim Minjun", "grade": "초5", "enrollment_date": date(2024, 1, 10), "payment_day": 15},
        {"name": "Lee Seoyeon", "grade": "중2", "enrollment_date": date(2024, 2, 1), "payment_day": 31},
        {"name": "Park Jiho", "grade": "고1", "enrollment_date": date(2024, 3, 5), "payment_day": 5},
    ]
    added = {}
    for s in students:
        exists = db.query(Student).filter_by(name=s["name"]).first()
        if exists:
            added[s["name"]] = exists
            print(f"  Exists: {s['name']}")
            continue
        student = Student(tuition_fee=standard_fee(s["grade"], settings), **s)
        db.add(student)
        db.commit()
        db.refresh(student)
        added[s["name"]] = student
        print(f"  Added: {s['name']} ({student.tuition_fee}/month, due day {student.payment_day})")

    # 3. PAYMENTS (a few settled months)
    payments = [
        ("Kim Minjun", date(2024, 2, 12)),
        ("Lee Seoyeon", date(2024, 2, 29)),
        ("Lee Seoyeon", date(2024, 3, 30)),
    ]
    for name, paid_on in payments:
        student = added[name]
        month = billing_month_of(paid_on)
        exists = db.query(Payment).filter_by(student_id=student.id, billing_month=month).first()
        if not exists:
            db.add(Payment(
                student_id=student.id,
                payment_date=paid_on,
                amount=student.tuition_fee,
                memo=f"Tuition for {month}",
                billing_month=month,
            ))
            print(f"  Payment: {name} {month}")
    db.commit()

    print("\nAll data seeded.")
    db.close()

if __name__ == "__main__":
    seed_data()
