"""
Job similarity and candidate match scoring.

Similarity between two jobs is a deterministic heuristic (0-100):

- 40 points when both carry a category and the categories match (case-insensitive)
- 30 points when both carry a job type and the types match
- up to 30 points for skills: the share of the anchor's skill keywords that the
  other job also lists exactly, times 30, truncated

Skills are measured against the anchor's list, so similarity(A, B) and
similarity(B, A) can differ. When no factor is comparable the score is 50.

The per-viewer match score and match factors sit behind strategy objects. The
active strategies are fixed placeholders until a profile-based algorithm
replaces them.
"""
from typing import Any, Protocol

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from ..models.job import Job, JobStatus
from ..schemas.job import MatchFactorOut, SimilarJobOut
from ..utils.error_handlers import JobNotFoundError

CATEGORY_POINTS = 40
JOB_TYPE_POINTS = 30
SKILL_POINTS = 30
NO_FACTOR_SCORE = 50
DEFAULT_SIMILAR_LIMIT = 5


def skills_to_keywords(skills: str | None) -> list[str]:
    if not skills:
        return []
    return [s.strip() for s in skills.split(",") if s.strip()]


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def _type_value(job_type: Any) -> str | None:
    if job_type is None:
        return None
    return getattr(job_type, "value", job_type)


def calculate_similarity(anchor: Any, candidate: Any) -> int:
    score = 0
    comparable = 0

    if _has_text(anchor.category) and _has_text(candidate.category):
        comparable += 1
        if anchor.category.strip().lower() == candidate.category.strip().lower():
            score += CATEGORY_POINTS

    anchor_type = _type_value(anchor.job_type)
    candidate_type = _type_value(candidate.job_type)
    if anchor_type is not None and candidate_type is not None:
        comparable += 1
        if anchor_type == candidate_type:
            score += JOB_TYPE_POINTS

    # blank skill lists still count as compared; repeated anchor keywords count each time
    if anchor.skills is not None and candidate.skills is not None:
        comparable += 1
        anchor_skills = skills_to_keywords(anchor.skills)
        candidate_skills = set(skills_to_keywords(candidate.skills))
        if anchor_skills:
            shared = sum(1 for s in anchor_skills if s in candidate_skills)
            score += int(shared / len(anchor_skills) * SKILL_POINTS)

    if comparable == 0:
        return NO_FACTOR_SCORE
    return min(100, score)


def find_similar_candidates(db: Session, anchor: Job, limit: int) -> list[Job]:
    """Active jobs other than the anchor; category match outranks job type match."""
    ordering = []
    # without an anchor category nothing matches, so the tier is skipped
    if _has_text(anchor.category):
        ordering.append(case((func.lower(Job.category) == anchor.category.strip().lower(), 0), else_=1))
    if anchor.job_type is not None:
        ordering.append(case((Job.job_type == anchor.job_type, 0), else_=1))
    ordering.append(Job.id.asc())

    return (
        db.query(Job)
        .filter(Job.status == JobStatus.ACTIVE, Job.id != anchor.id)
        .order_by(*ordering)
        .limit(limit)
        .all()
    )


def get_similar_jobs(db: Session, job_id: int, limit: int = DEFAULT_SIMILAR_LIMIT) -> list[SimilarJobOut]:
    anchor = db.query(Job).filter(Job.id == job_id).first()
    if anchor is None:
        raise JobNotFoundError(job_id)
    return similar_jobs_for(db, anchor, limit)


def similar_jobs_for(db: Session, anchor: Job, limit: int = DEFAULT_SIMILAR_LIMIT) -> list[SimilarJobOut]:
    if limit <= 0:
        return []
    return [
        SimilarJobOut(
            id=str(job.id),
            title=job.title,
            company=job.company,
            match_percent=calculate_similarity(anchor, job),
        )
        for job in find_similar_candidates(db, anchor, limit)
    ]


class MatchScoreStrategy(Protocol):
    def score(self, job: Any, viewer_id: int | None) -> int: ...


class MatchFactorStrategy(Protocol):
    def factors(self, job: Any, viewer_id: int | None) -> list[MatchFactorOut]: ...


class PlaceholderMatchScoreStrategy:
    """Fixed score for any identified viewer; no profile data is consulted."""

    PLACEHOLDER_SCORE = 75

    def score(self, job: Any, viewer_id: int | None) -> int:
        if viewer_id is None or job is None:
            return 0
        return self.PLACEHOLDER_SCORE


class PlaceholderMatchFactorStrategy:
    """One factor per listed skill, equal weight, fixed score."""

    PLACEHOLDER_FACTOR_SCORE = 0.8

    def factors(self, job: Any, viewer_id: int | None) -> list[MatchFactorOut]:
        if viewer_id is None or job is None or not _has_text(job.skills):
            return []
        # weight uses the raw split count, blanks included
        parts = job.skills.split(",")
        weight = 1.0 / len(parts)
        return [
            MatchFactorOut(label=part.strip(), weight=weight, score=self.PLACEHOLDER_FACTOR_SCORE)
            for part in parts
            if part.strip()
        ]


match_score_strategy: MatchScoreStrategy = PlaceholderMatchScoreStrategy()
match_factor_strategy: MatchFactorStrategy = PlaceholderMatchFactorStrategy()


def calculate_match_score(job: Any, viewer_id: int | None) -> int:
    return match_score_strategy.score(job, viewer_id)


def get_match_factors(job: Any, viewer_id: int | None) -> list[MatchFactorOut]:
    return match_factor_strategy.factors(job, viewer_id)
