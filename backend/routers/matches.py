"""
Co-founder match endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException

from cofound_core.models import Profile
from cofound_core.services import rank_candidates

from backend.async_supabase import get_match_inputs, save_matches_parallel
from backend.backend_config import MATCH_LIMIT, is_valid_uuid
from backend.dependencies import get_async_supabase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["Matches"])


@router.get("")
async def get_matches(x_user_id: Optional[str] = Header(None)):
    """
    Rank the best co-founder candidates for the signed-in user.

    1. Loads the user's profile, active candidates, connections and passed matches
    2. Scores everyone not already connected or passed
    3. Upserts the top matches into the matches table
    """
    if not x_user_id or not is_valid_uuid(x_user_id):
        raise HTTPException(status_code=401, detail="Unauthorized")

    async_client = get_async_supabase()

    try:
        inputs = await get_match_inputs(async_client, x_user_id)
    except Exception as e:
        logger.error(f"Failed to load match inputs for {x_user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch candidate profiles")

    if not inputs['profile']:
        raise HTTPException(status_code=404, detail="Profile not found. Please complete onboarding first.")

    profile = Profile.from_row(inputs['profile'])
    candidates = [Profile.from_row(row) for row in inputs['candidates']]

    top_matches = rank_candidates(profile, candidates, inputs['excluded_ids'], limit=MATCH_LIMIT)
    if top_matches:
        saved = await save_matches_parallel(async_client, x_user_id, top_matches)
        logger.info(f"Ranked {len(top_matches)} matches for {x_user_id} ({saved['matches_saved']} saved)")

    response_matches = [
        {
            **match.profile.to_public_dict(),
            "score": match.score,
            "breakdown": match.breakdown.as_dict(),
        }
        for match in top_matches
    ]

    return {"matches": response_matches, "total": len(response_matches)}
