from contextlib import contextmanager


@contextmanager
def transactional(session):
    """Context manager for database transactions."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
