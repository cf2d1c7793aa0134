"""Part-time job contracts settled at every week start."""

from .catalog import JOBS, JOBS_BY_ID
from .service import missing_requirements, quit_job, settle_job_week, take_job
from .types import Job, JobContract, JobSettlement

__all__ = [
    "JOBS",
    "JOBS_BY_ID",
    "Job",
    "JobContract",
    "JobSettlement",
    "missing_requirements",
    "quit_job",
    "settle_job_week",
    "take_job",
]
