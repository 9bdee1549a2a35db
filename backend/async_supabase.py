"""
Async Supabase client for parallel HTTP operations.
Uses aiohttp for concurrent requests to Supabase REST API.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

import aiohttp

from cofound_core.services.matching import ScoredCandidate

logger = logging.getLogger(__name__)


class AsyncSupabaseClient:
    """Async client for Supabase REST API operations."""

    def __init__(self, url: str, service_key: str):
        self.url = url
        self.service_key = service_key
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    def _get_headers(self) -> Dict[str, str]:
        return {
            'apikey': self.service_key,
            'Authorization': f'Bearer {self.service_key}',
            'Content-Type': 'application/json',
            'Prefer': 'return=representation'
        }

    async def request(
        self,
        endpoint: str,
        method: str = 'GET',
        body: Any = None,
        upsert: bool = False,
        on_conflict: str = None
    ) -> Optional[Any]:
        """Make an async request to Supabase REST API."""
        session = await self._get_session()

        # Build URL with on_conflict parameter for upsert
        if upsert and on_conflict:
            separator = '&' if '?' in endpoint else '?'
            url = f"{self.url}/rest/v1/{endpoint}{separator}on_conflict={on_conflict}"
        else:
            url = f"{self.url}/rest/v1/{endpoint}"

        headers = self._get_headers()
        if upsert:
            # Enable upsert behavior - merge on conflict
            headers['Prefer'] = 'return=representation,resolution=merge-duplicates'

        kwargs = {'headers': headers}
        if body is not None:
            kwargs['data'] = json.dumps(body)

        async with session.request(method, url, **kwargs) as response:
            if not response.ok:
                error_text = await response.text()
                raise Exception(f"Supabase error ({response.status}): {error_text}")

            text = await response.text()
            return json.loads(text) if text else None


async def get_match_inputs(client: AsyncSupabaseClient, user_id: str) -> Dict[str, Any]:
    """
    Fetch everything needed to rank matches for a user, in parallel.

    Returns the caller's profile row (or None), the actively-looking
    candidate rows, and the ids of users to exclude (any connection,
    either direction, and matches the user passed on).
    """
    profile_task = client.request(f"profiles?id=eq.{user_id}&select=*", 'GET')
    candidates_task = client.request(
        f"profiles?is_actively_looking=eq.true&id=neq.{user_id}&select=*", 'GET'
    )
    connections_task = client.request(
        f"connections?or=(requester_id.eq.{user_id},recipient_id.eq.{user_id})&select=requester_id,recipient_id",
        'GET'
    )
    passed_task = client.request(
        f"matches?or=(user_a.eq.{user_id},user_b.eq.{user_id})&status=eq.passed&select=user_a,user_b,status",
        'GET'
    )

    profiles, candidates, connections, passed = await asyncio.gather(
        profile_task, candidates_task, connections_task, passed_task
    )

    excluded = set()
    for conn in connections or []:
        excluded.add(conn['recipient_id'] if conn['requester_id'] == user_id else conn['requester_id'])
    for match in passed or []:
        excluded.add(match['user_b'] if match['user_a'] == user_id else match['user_a'])

    return {
        'profile': profiles[0] if profiles else None,
        'candidates': candidates or [],
        'excluded_ids': excluded,
    }


async def save_matches_parallel(
    client: AsyncSupabaseClient,
    user_id: str,
    matches: List[ScoredCandidate]
) -> Dict[str, int]:
    """
    Upsert ranked matches into the matches table (up to 10 concurrent).

    user_a is always the smaller id so each pair has exactly one row.
    """
    semaphore = asyncio.Semaphore(10)
    now = datetime.now(timezone.utc).isoformat()

    async def upsert_match(match: ScoredCandidate) -> bool:
        async with semaphore:
            user_a, user_b = sorted([user_id, match.profile.id])
            try:
                await client.request(
                    'matches',
                    'POST',
                    {
                        'user_a': user_a,
                        'user_b': user_b,
                        'score': match.score,
                        'score_breakdown': match.breakdown.as_dict(),
                        'status': 'pending',
                        'last_computed_at': now,
                    },
                    upsert=True,
                    on_conflict='user_a,user_b'
                )
                return True
            except Exception as e:
                logger.error(f"Error saving match {user_a}/{user_b}: {e}")
                return False

    results = await asyncio.gather(*[upsert_match(m) for m in matches])
    saved = sum(1 for r in results if r)
    return {'matches_saved': saved, 'failed': len(results) - saved}
