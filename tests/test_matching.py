from __future__ import annotations

from dataclasses import replace

from cofound_core.models import Profile
from cofound_core.services.matching import (
    CATEGORY_MAX,
    ROLE_PAIRS,
    compute_score,
    industry_score,
    location_score,
    rank_candidates,
)


def _profile(user_id: str = "a", **fields) -> Profile:
    return Profile(id=user_id, **fields)


FULL = _profile(
    "full",
    roles=("technical", "business"),
    industries=("fintech", "edtech"),
    commitment="full_time",
    idea_stage="side_project",
    country="Kazakhstan",
    city="Almaty",
    languages=("Russian", "Kazakh", "English"),
)

SAMPLES = [
    FULL,
    _profile("b", roles=("design",), industries=("fintech", "agritech"), commitment="part_time",
             idea_stage="have_idea", country="Uzbekistan", city="Tashkent", languages=("Russian", "Uzbek")),
    _profile("c", roles=("operations", "product"), industries=("logistics",), commitment="exploring",
             idea_stage="no_idea", country="Kazakhstan", city="Astana", languages=("Kazakh",)),
    _profile("d", roles=("business",), commitment="full_time", idea_stage="early_traction",
             country="Tajikistan", languages=("English", "Tajik", "Russian")),
    _profile("e"),
]


def test_subscores_within_category_bounds() -> None:
    for a in SAMPLES:
        for b in SAMPLES:
            breakdown = compute_score(a, b).as_dict()
            for category, value in breakdown.items():
                assert 0 <= value <= CATEGORY_MAX[category]
            assert 0 <= compute_score(a, b).total <= 100


def test_every_category_is_symmetric() -> None:
    for a in SAMPLES:
        for b in SAMPLES:
            assert compute_score(a, b).as_dict() == compute_score(b, a).as_dict()


def test_role_table_is_symmetric() -> None:
    for role_a, row in ROLE_PAIRS.items():
        for role_b, value in row.items():
            assert ROLE_PAIRS[role_b][role_a] == value


def test_fully_populated_self_pair_scores_maximum() -> None:
    breakdown = compute_score(FULL, replace(FULL, id="twin"))
    assert breakdown.as_dict() == CATEGORY_MAX
    assert breakdown.total == 100


def test_no_overlap_scores_zero() -> None:
    a = _profile("a", roles=("technical",), industries=("fintech",), commitment="full_time",
                 idea_stage="no_idea", country="Kazakhstan", city="Almaty", languages=("Kazakh",))
    b = _profile("b", roles=("wizard",), industries=("gaming",), commitment=None,
                 idea_stage="early_traction", country="Georgia", city="Tbilisi", languages=("Georgian",))
    assert compute_score(a, b).total == 0


def test_missing_attributes_score_zero() -> None:
    assert compute_score(FULL, _profile("empty")).total == 0


def test_complementary_roles_beat_same_role() -> None:
    tech = _profile("t", roles=("technical",))
    biz = _profile("b", roles=("business",))
    assert compute_score(tech, biz).roles == 30
    assert compute_score(tech, replace(tech, id="t2")).roles == 5


def test_industry_uses_jaccard_rounded_half_up() -> None:
    a = _profile("a", industries=("fintech",))
    b = _profile("b", industries=("fintech", "edtech", "health", "retail", "travel", "media", "ai", "iot"))
    # 1/8 * 20 = 2.5
    assert industry_score(a, b) == 3


def test_commitment_rules() -> None:
    full = _profile("a", commitment="full_time")
    part = _profile("b", commitment="part_time")
    exploring = _profile("c", commitment="exploring")
    assert compute_score(full, full).commitment == 20
    assert compute_score(full, part).commitment == 10
    assert compute_score(full, exploring).commitment == 5


def test_stage_distance() -> None:
    a = _profile("a", idea_stage="have_idea")
    assert compute_score(a, _profile("b", idea_stage="side_project")).stage == 5
    assert compute_score(a, _profile("b", idea_stage="early_traction")).stage == 0
    assert compute_score(a, _profile("b", idea_stage="unknown")).stage == 0


def test_location_levels() -> None:
    almaty = _profile("a", country="Kazakhstan", city="Almaty")
    assert location_score(almaty, _profile("b", country="Kazakhstan", city="Almaty")) == 10
    assert location_score(almaty, _profile("b", country="Kazakhstan", city="Astana")) == 7
    assert location_score(almaty, _profile("b", country="Kyrgyzstan")) == 4
    assert location_score(almaty, _profile("b", country="Tajikistan")) == 0
    assert location_score(almaty, _profile("b", city="Almaty")) == 0


def test_languages_thresholds() -> None:
    a = _profile("a", languages=("Russian", "English"))
    assert compute_score(a, _profile("b", languages=("Russian", "English", "Uzbek"))).languages == 10
    assert compute_score(a, _profile("b", languages=("Russian",))).languages == 5
    assert compute_score(a, _profile("b", languages=("Kyrgyz",))).languages == 0


def test_rank_candidates_orders_and_excludes() -> None:
    ranked = rank_candidates(FULL, SAMPLES, exclude_ids={"d"}, limit=20)
    ids = [c.profile.id for c in ranked]
    assert "full" not in ids
    assert "d" not in ids
    scores = [c.score for c in ranked]
    assert scores == sorted(scores, reverse=True)
    assert ids[-1] == "e"


def test_rank_candidates_respects_limit() -> None:
    candidates = [_profile(f"u{i}", roles=("business",)) for i in range(30)]
    ranked = rank_candidates(_profile("me", roles=("technical",)), candidates, limit=20)
    assert len(ranked) == 20
    # equal scores keep input order
    assert [c.profile.id for c in ranked[:3]] == ["u0", "u1", "u2"]
