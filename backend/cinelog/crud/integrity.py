"""Classification of IntegrityErrors raised by PostgreSQL (psycopg) or SQLite."""

from psycopg.errors import CheckViolation, ForeignKeyViolation, UniqueViolation
from sqlalchemy.exc import IntegrityError

from cinelog.core.enums import IntegrityKind

_SQLITE_MESSAGES = {
    "UNIQUE constraint failed": IntegrityKind.UNIQUE,
    "PRIMARY KEY constraint failed": IntegrityKind.UNIQUE,
    "FOREIGN KEY constraint failed": IntegrityKind.FOREIGN_KEY,
    "CHECK constraint failed": IntegrityKind.CHECK,
}


def classify_integrity_error(error: IntegrityError) -> IntegrityKind:
    """
    Tell which kind of constraint an IntegrityError violated.

    Parameters:
        error (IntegrityError): The error raised on flush or commit.
    Returns:
        IntegrityKind: UNIQUE, FOREIGN_KEY, CHECK or OTHER.
    """
    orig = error.orig
    if isinstance(orig, UniqueViolation):
        return IntegrityKind.UNIQUE
    if isinstance(orig, ForeignKeyViolation):
        return IntegrityKind.FOREIGN_KEY
    if isinstance(orig, CheckViolation):
        return IntegrityKind.CHECK

    message = str(orig)
    for prefix, kind in _SQLITE_MESSAGES.items():
        if message.startswith(prefix):
            return kind
    return IntegrityKind.OTHER
