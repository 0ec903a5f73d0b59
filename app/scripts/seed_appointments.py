"""
Create the core appointments (Captain, CSM, Dy CSM, section PSs) if missing. Run from project root:
  python -m app.scripts.seed_appointments
Safe to run repeatedly; existing names are left untouched.
"""
import logging
import sys

from app.core.database import SessionLocal
from app.services.appointments import seed_core_appointments
from app.services.store import SqlAppointmentStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    db = SessionLocal()
    try:
        created = seed_core_appointments(SqlAppointmentStore(db))
        logger.info("Seeding completed: created=%s", created)
        return 0
    except Exception as e:
        logger.exception("Seeding failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
