from contextlib import contextmanager


@contextmanager
def session_scope(SessionLocal):
    """
    Provide a database session that commits on success and rolls back on error.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
