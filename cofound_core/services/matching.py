"""
Co-founder compatibility scoring.

Six independent categories, each capped at its own maximum:

    roles 30, industry 20, commitment 20, stage 10, location 10, languages 10

A missing attribute on either side scores 0 for that category. The total is
the plain sum and is only used to order candidates.
"""

import math
from dataclasses import dataclass, asdict
from typing import Iterable, Optional

from ..models import Profile

CATEGORY_MAX = {
    "roles": 30,
    "industry": 20,
    "commitment": 20,
    "stage": 10,
    "location": 10,
    "languages": 10,
}

# Symmetric: ROLE_PAIRS[a][b] == ROLE_PAIRS[b][a]
ROLE_PAIRS = {
    "technical": {"business": 30, "product": 20, "design": 20, "operations": 15, "technical": 5},
    "business": {"technical": 30, "product": 15, "design": 15, "operations": 10, "business": 5},
    "design": {"technical": 20, "business": 15, "product": 15, "operations": 10, "design": 5},
    "product": {"technical": 20, "business": 15, "design": 15, "operations": 10, "product": 5},
    "operations": {"technical": 15, "business": 10, "design": 10, "product": 10, "operations": 5},
}

STAGES = ["no_idea", "have_idea", "side_project", "early_traction"]

NEIGHBORING_COUNTRIES = {
    "Kazakhstan": {"Kyrgyzstan", "Uzbekistan", "Turkmenistan"},
    "Kyrgyzstan": {"Kazakhstan", "Uzbekistan", "Tajikistan"},
    "Uzbekistan": {"Kazakhstan", "Kyrgyzstan", "Tajikistan", "Turkmenistan"},
    "Tajikistan": {"Kyrgyzstan", "Uzbekistan"},
    "Turkmenistan": {"Kazakhstan", "Uzbekistan"},
}


@dataclass(frozen=True)
class ScoreBreakdown:
    roles: int = 0
    industry: int = 0
    commitment: int = 0
    stage: int = 0
    location: int = 0
    languages: int = 0

    @property
    def total(self) -> int:
        return sum(self.as_dict().values())

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class ScoredCandidate:
    profile: Profile
    breakdown: ScoreBreakdown

    @property
    def score(self) -> int:
        return self.breakdown.total


def role_score(a: Profile, b: Profile) -> int:
    """Best complementarity over every role pair."""
    if not a.roles or not b.roles:
        return 0
    return max(ROLE_PAIRS.get(ra, {}).get(rb, 0) for ra in a.roles for rb in b.roles)


def industry_score(a: Profile, b: Profile) -> int:
    ind_a, ind_b = set(a.industries), set(b.industries)
    if not ind_a or not ind_b:
        return 0
    ratio = len(ind_a & ind_b) / len(ind_a | ind_b)
    # Half rounds up, not to even
    return math.floor(ratio * CATEGORY_MAX["industry"] + 0.5)


def commitment_score(a: Profile, b: Profile) -> int:
    if not a.commitment or not b.commitment:
        return 0
    if a.commitment == b.commitment:
        return 20
    if "exploring" in (a.commitment, b.commitment):
        return 5
    return 10


def stage_score(a: Profile, b: Profile) -> int:
    if a.idea_stage not in STAGES or b.idea_stage not in STAGES:
        return 0
    diff = abs(STAGES.index(a.idea_stage) - STAGES.index(b.idea_stage))
    if diff == 0:
        return 10
    if diff == 1:
        return 5
    return 0


def location_score(a: Profile, b: Profile) -> int:
    if not a.country or not b.country:
        return 0
    if a.city and b.city and a.city == b.city:
        return 10
    if a.country == b.country:
        return 7
    if b.country in NEIGHBORING_COUNTRIES.get(a.country, ()):
        return 4
    return 0


def language_score(a: Profile, b: Profile) -> int:
    lang_a, lang_b = set(a.languages), set(b.languages)
    if not lang_a or not lang_b:
        return 0
    shared = len(lang_a & lang_b)
    if shared >= 2:
        return 10
    if shared == 1:
        return 5
    return 0


def compute_score(a: Profile, b: Profile) -> ScoreBreakdown:
    """Compute the compatibility breakdown between two profiles."""
    return ScoreBreakdown(
        roles=role_score(a, b),
        industry=industry_score(a, b),
        commitment=commitment_score(a, b),
        stage=stage_score(a, b),
        location=location_score(a, b),
        languages=language_score(a, b),
    )


def rank_candidates(
    profile: Profile,
    candidates: Iterable[Profile],
    exclude_ids: Optional[set[str]] = None,
    limit: int = 20,
) -> list[ScoredCandidate]:
    """
    Score candidates against a profile and return the best matches.

    Args:
        profile: The user looking for co-founders
        candidates: Profiles to compare against
        exclude_ids: User ids to skip (existing connections, passed matches)
        limit: Maximum number of matches to return

    Returns:
        Candidates ordered by total score, highest first. Equal scores keep
        their input order.
    """
    exclude_ids = exclude_ids or set()
    scored = [
        ScoredCandidate(profile=candidate, breakdown=compute_score(profile, candidate))
        for candidate in candidates
        if candidate.id != profile.id and candidate.id not in exclude_ids
    ]
    scored.sort(key=lambda c: c.score, reverse=True)
    return scored[:limit]
