from clubmanager.database import SessionLocal


# Yields a database session per request
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
