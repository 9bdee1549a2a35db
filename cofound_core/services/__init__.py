from .matching import ScoreBreakdown, ScoredCandidate, compute_score, rank_candidates
from .telegram import TelegramBotClient, TelegramDeliveryError
from .notifications import NotificationDispatcher
from .widget_auth import WidgetAuthVerifier, VerifiedIdentity, AuthRejected, verify
from .telegram_login import TelegramLoginService, LoginResult
from .supabase_client import SupabaseClient, SupabaseError
from .supabase_auth import SupabaseAuthAdmin, SessionIssueError

__all__ = [
    "ScoreBreakdown",
    "ScoredCandidate",
    "compute_score",
    "rank_candidates",
    "TelegramBotClient",
    "TelegramDeliveryError",
    "NotificationDispatcher",
    "WidgetAuthVerifier",
    "VerifiedIdentity",
    "AuthRejected",
    "verify",
    "TelegramLoginService",
    "LoginResult",
    "SupabaseClient",
    "SupabaseError",
    "SupabaseAuthAdmin",
    "SessionIssueError",
]
