"""Composite identifiers of the form ``jobId_jobInstanceId[_taskId]``."""

import re
from enum import IntEnum

SPLITTER_TOKEN = "_"

_INT_RE = re.compile(r"[+-]?[0-9]+")


class IdType(IntEnum):
    """Position of a component inside a unique id."""

    JOB_ID = 0
    JOB_INSTANCE_ID = 1
    TASK_ID = 2


def parse_id(unique_id: str, id_type: int) -> int:
    """Extract one numeric component from a unique id."""
    try:
        position = IdType(id_type)
    except ValueError:
        raise ValueError(f"Invalid idType: {id_type} ") from None
    tokens = unique_id.split(SPLITTER_TOKEN)
    if position >= len(tokens):
        raise ValueError(f"unique id {unique_id!r} has no {position.name.lower()} part")
    token = tokens[position]
    if not _INT_RE.fullmatch(token):
        raise ValueError(f"invalid number {token!r} in unique id {unique_id!r}")
    value = int(token)
    if not -(2**63) <= value < 2**63:
        raise ValueError(f"number {token!r} out of range in unique id {unique_id!r}")
    return value


def get_unique_id(job_id: int, job_instance_id: int, task_id: int) -> str:
    """Join job, instance and task ids into one unique id."""
    return SPLITTER_TOKEN.join(str(part) for part in (job_id, job_instance_id, task_id))


def get_unique_id_without_task_id(job_id: int, job_instance_id: int) -> str:
    """Join job and instance ids into one unique id."""
    return SPLITTER_TOKEN.join(str(part) for part in (job_id, job_instance_id))