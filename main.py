import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from config import Config
from database import engine, Base, SessionLocal

# --- IMPORT ROUTERS (APIs) ---
from routers import students, payments, settings

# --- IMPORT MODELS ---
from models.students import Student
from models.payments import Payment
from models.system import AcademySetting

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# --- CREATE DATABASE TABLES ---
Base.metadata.create_all(bind=engine)

# --- AUTO MIGRATION: Add billing columns to existing tables ---
def run_migrations():
    """
    Adds billing columns to a production database created by an older build.
    Safe to run on every start: each statement is IF NOT EXISTS.
    """
    db = SessionLocal()

    try:
        is_postgres = engine.url.get_backend_name() == "postgresql"

        if is_postgres:
            migrations = [
                # students table
                "ALTER TABLE students ADD COLUMN IF NOT EXISTS enrollment_date DATE",
                "ALTER TABLE students ADD COLUMN IF NOT EXISTS tuition_fee INTEGER DEFAULT 0",
                "ALTER TABLE students ADD COLUMN IF NOT EXISTS payment_day INTEGER DEFAULT 1",

                # payments table
                "ALTER TABLE payments ADD COLUMN IF NOT EXISTS method VARCHAR(20) DEFAULT 'card'",
                "ALTER TABLE payments ADD COLUMN IF NOT EXISTS memo VARCHAR(255)",
            ]

            for sql in migrations:
                try:
                    db.execute(text(sql))
                    db.commit()
                except Exception as e:
                    db.rollback()
                    logger.warning("Migration skipped: %s", str(e)[:100])

            logger.info("Database migrations completed")
        else:
            logger.info("%s detected - skipping PostgreSQL migrations", engine.url.get_backend_name())
    finally:
        db.close()

# Run migrations on startup
run_migrations()

app = FastAPI(title=Config.APP_TITLE)

# ==========================================
# CORS MIDDLEWARE (front-end app)
# ==========================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- REGISTER ROUTERS ---
app.include_router(students.router)
app.include_router(payments.router)
app.include_router(settings.router)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
