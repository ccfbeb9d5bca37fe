# create_tables.py
"""
Create the schema and make sure an admin account exists.

Registration only ever creates members, so the first admin comes from here.
"""
import logging
import os

from app.database import Base, SessionLocal, engine
from app.models import User, UserRole
from app.utils.security import hash_password

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("create_tables")


def create_tables():
    """Create all tables"""
    Base.metadata.create_all(bind=engine)
    logger.info("All tables created")


def create_default_admin(email: str = None, password: str = None, name: str = "System Administrator") -> User:
    email = email or os.getenv("ADMIN_EMAIL", "admin@example.com")
    password = password or os.getenv("ADMIN_PASSWORD", "admin123")

    db = SessionLocal()
    try:
        admin = db.query(User).filter(User.email == email).first()
        if admin:
            if admin.role != UserRole.ADMIN.value:
                admin.role = UserRole.ADMIN.value
                db.commit()
                db.refresh(admin)
                logger.info("Promoted existing user %s to admin", email)
            else:
                logger.info("Admin user already exists")
            return admin

        admin = User(
            name=name,
            email=email,
            hashed_password=hash_password(password),
            role=UserRole.ADMIN.value,
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info("Default admin user created: %s", email)
        return admin
    finally:
        db.close()


if __name__ == "__main__":
    create_tables()
    create_default_admin()
