from functools import lru_cache

from supabase import Client, create_client

from config import require_env


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    return create_client(
        require_env("SUPABASE_URL"),
        require_env("SUPABASE_SERVICE_ROLE_KEY"),
    )
