"""
Connection request endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from cofound_core.models import NotificationEvent, NotificationKind
from cofound_core.services import NotificationDispatcher, SupabaseClient, SupabaseError

from backend.dependencies import get_dispatcher, get_supabase
from backend.schemas.connections import ConnectionRespondRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/connections", tags=["Connections"])


@router.post("/respond")
def respond_to_connection(
    request: ConnectionRespondRequest,
    x_user_id: Optional[str] = Header(None),
    supabase: SupabaseClient = Depends(get_supabase),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Accept or decline an incoming connection request.

    Addressed either by connectionId (connections page) or by requesterId
    (notifications page). Accepting opens a message thread and notifies the
    requester; the notification never fails the request.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")

    if (not request.requester_id and not request.connection_id) or request.action not in ("accept", "decline"):
        raise HTTPException(status_code=400, detail="Invalid request")

    try:
        if request.action == "decline":
            if request.connection_id:
                supabase.delete_connection(request.connection_id, x_user_id)
            else:
                supabase.update_connection_status(
                    "declined", requester_id=request.requester_id, recipient_id=x_user_id
                )
            return {"success": True}

        requester_id = request.requester_id
        if request.connection_id:
            connection = supabase.get_incoming_connection(request.connection_id, x_user_id)
            if not connection:
                raise HTTPException(status_code=404, detail="Connection not found")
            requester_id = connection["requester_id"]
            supabase.update_connection_status("accepted", connection_id=request.connection_id)
        else:
            supabase.update_connection_status(
                "accepted", requester_id=requester_id, recipient_id=x_user_id
            )
    except SupabaseError as e:
        raise HTTPException(status_code=500, detail=e.body)

    try:
        supabase.create_thread(x_user_id, requester_id)
    except SupabaseError as e:
        logger.error(f"Thread creation error: {e}")

    # The accept is committed; nothing below may fail the request
    try:
        me = supabase.get_profile(x_user_id)
    except Exception as e:
        logger.error(f"Could not load sender profile {x_user_id}: {e}")
        me = None
    my_name = (me.full_name if me else None) or "Someone"

    dispatcher.notify(
        NotificationEvent(
            user_id=requester_id,
            kind=NotificationKind.CONNECTION_ACCEPTED.value,
            sender_name=my_name,
        ),
        title=f"{my_name} accepted your connection request",
        body="You can now message each other.",
        link=f"/profile/{x_user_id}",
    )

    return {"success": True}
