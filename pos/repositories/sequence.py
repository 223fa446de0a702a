from sqlalchemy.orm import Session

from ..models.sequence import SEQUENCE_START


def next_number(session: Session, seq_model) -> str:
    """Draw the next ``<PREFIX>-<n>`` value from a counter table.

    The row is written in the caller's transaction: a rollback discards the
    number, a commit makes it permanent.
    """
    row = seq_model()
    session.add(row)
    session.flush()
    return f"{seq_model.prefix}-{SEQUENCE_START + row.id - 1}"
