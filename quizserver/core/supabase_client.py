# quizserver/core/supabase_client.py
from supabase import create_client, Client
from .config import Settings, settings

_supabase: Client | None = None

def get_supabase(cfg: Settings | None = None) -> Client:
    global _supabase
    if _supabase is None:
        cfg = cfg or settings
        # AnyUrl is not a str, create_client wants one
        _supabase = create_client(str(cfg.SUPABASE_URL), str(cfg.SUPABASE_SERVICE_ROLE_KEY))
    return _supabase

def reset_supabase() -> None:
    global _supabase
    _supabase = None
