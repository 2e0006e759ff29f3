from protean.domain import Domain
from sqlalchemy.dialects import postgresql, sqlite

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def setup_db(domain: Domain):
    """Create the tables of every aggregate and entity registered with ``domain``."""
    with domain.domain_context():
        domain.setup_database()


def drop_db(domain: Domain):
    """Drop the tables of every aggregate and entity registered with ``domain``."""
    with domain.domain_context():
        domain.drop_database()


def reset_db(domain: Domain):
    """Delete every row, keeping the tables."""
    with domain.domain_context():
        domain.truncate_database()


def dialect_insert(session, table):
    """An ``INSERT`` for ``table`` that supports ``ON CONFLICT`` on the session's dialect."""
    dialect = session.get_bind().dialect.name
    if dialect not in _INSERTS:
        raise NotImplementedError(f"Upserts are not supported on {dialect}")
    return _INSERTS[dialect](table)
