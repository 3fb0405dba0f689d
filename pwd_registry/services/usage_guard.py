"""
Usage-count guard for deletions.

A row that other tables reference is never deleted. The check and the
delete run as one conditional DELETE statement, so a referencing row
inserted concurrently either lands before the delete (and blocks it) or
fails its own foreign key afterwards. When nothing was deleted the
dependent tables are counted to build a message naming the blocker.
"""
from sqlalchemy import delete, exists, func, select
from sqlalchemy.orm import Session
from typing import Dict, List, NamedTuple, Any
import logging

from pwd_registry.exceptions import NotFoundError, ConflictError

logger = logging.getLogger(__name__)


class Dependent(NamedTuple):
    """A foreign-key column (in some table) that points at the guarded row."""
    table: str
    column: Any


def usage_counts(db: Session, record_id: int, dependents: List[Dependent]) -> Dict[str, int]:
    """Rows referencing `record_id`, per dependent table (zeros included)."""
    counts: Dict[str, int] = {}
    for dep in dependents:
        count = db.execute(
            select(func.count()).where(dep.column == record_id)
        ).scalar() or 0
        counts[dep.table] = counts.get(dep.table, 0) + int(count)
    return counts


def guarded_delete(
    db: Session,
    model,
    record_id: int,
    dependents: List[Dependent],
    label: str,
    commit: bool = True,
) -> None:
    """
    Delete `model` row `record_id` unless any dependent references it.

    Raises NotFoundError if the row is absent and ConflictError (naming
    the blocking tables) if it is still in use.
    """
    stmt = delete(model).where(model.id == record_id)
    for dep in dependents:
        stmt = stmt.where(~exists().where(dep.column == record_id))

    result = db.execute(stmt, execution_options={"synchronize_session": False})

    if result.rowcount == 1:
        if commit:
            db.commit()
        logger.info("Deleted %s %s", label, record_id)
        return

    db.rollback()

    if db.get(model, record_id) is None:
        raise NotFoundError(label, record_id)

    counts = usage_counts(db, record_id, dependents)
    blockers = {table: n for table, n in counts.items() if n > 0}
    summary = ", ".join(f"{n} row(s) in {table}" for table, n in blockers.items())
    logger.warning("Blocked delete of %s %s: %s", label, record_id, summary)
    raise ConflictError(
        f"Cannot delete {label} {record_id}: still referenced by {summary}",
        details={"usage": blockers},
    )
