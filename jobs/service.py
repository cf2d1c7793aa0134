from __future__ import annotations

"""Job contracts.

Taking a job costs a little energy up front (through the economy guard).
From then on each week start pays ``weekly_pay`` through ``grant``, takes
``energy_cost`` from the freshly reset energy (never below zero) and counts
the contract down. The week that pays the last contracted week ends it.
"""

import dataclasses
import logging
from typing import Dict, Mapping, Optional, Tuple

from career.types import Profile
from config import GameConstants
from economy.guard import apply_cost, grant
from economy.types import Cost
from errors import NOT_APPLICABLE, NOT_ELIGIBLE, UNKNOWN_JOB, CareerError

from .catalog import JOBS_BY_ID
from .types import Job, JobContract, JobSettlement

logger = logging.getLogger(__name__)


def missing_requirements(job: Job, profile: Profile) -> Dict[str, int]:
    """Requirement stats the profile falls short on, with the minimum needed."""
    return {stat: int(need) for stat, need in job.requirements.items() if profile.stat(stat) < int(need)}


def take_job(
    current: Optional[JobContract],
    job_id: str,
    profile: Profile,
    constants: GameConstants,
    *,
    jobs: Mapping[str, Job] = JOBS_BY_ID,
) -> Tuple[JobContract, Profile]:
    job = jobs.get(str(job_id))
    if job is None:
        raise CareerError(UNKNOWN_JOB, "no job with that id", {"job_id": job_id})
    if current is not None:
        raise CareerError(NOT_APPLICABLE, "already holding a job", {"job_id": current.job_id})
    missing = missing_requirements(job, profile)
    if missing:
        raise CareerError(NOT_ELIGIBLE, "job requirements not met", {"job_id": job.id, "missing": missing})

    paid = apply_cost(Cost(energy=int(constants.JOB_APPLICATION_ENERGY)), profile, reason=f"job:{job.id}")
    contract = JobContract(
        job_id=job.id,
        title=job.title,
        weekly_pay=int(job.weekly_pay),
        energy_cost=int(job.energy_cost),
        weeks_remaining=int(job.contract_weeks),
    )
    logger.info("job taken id=%s weeks=%d", job.id, contract.weeks_remaining)
    return contract, paid


def quit_job(current: Optional[JobContract]) -> JobContract:
    if current is None:
        raise CareerError(NOT_APPLICABLE, "not holding a job")
    logger.info("job quit id=%s weeks_left=%d", current.job_id, current.weeks_remaining)
    return current


def settle_job_week(
    current: Optional[JobContract],
    profile: Profile,
    constants: GameConstants,
) -> Tuple[Optional[JobContract], Profile, JobSettlement]:
    if current is None:
        return None, profile, JobSettlement()

    drain = min(int(current.energy_cost), int(profile.energy))
    profile = apply_cost(Cost(energy=drain), profile, reason=f"job:{current.job_id}")
    profile = grant(profile, constants, money=int(current.weekly_pay))

    left = int(current.weeks_remaining) - 1
    nxt: Optional[JobContract] = None
    if left >= 1:
        nxt = dataclasses.replace(current, weeks_remaining=left)
    else:
        logger.info("job contract finished id=%s", current.job_id)
    settlement = JobSettlement(
        pay=int(current.weekly_pay),
        energy_cost=drain,
        finished_job_id="" if nxt is not None else current.job_id,
    )
    return nxt, profile, settlement
