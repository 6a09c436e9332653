from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def smart_transaction(session: Session) -> Iterator:
    """
    Run the block inside a transaction on `session`.
    Opens a SAVEPOINT (begin_nested) when a transaction is already active,
    otherwise a regular transaction (begin) that commits on exit.
    """
    if session.in_transaction():
        cm = session.begin_nested()
    else:
        cm = session.begin()
    with cm:
        yield
