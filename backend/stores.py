from config import STORE_BACKENDS, Settings
from repositories.memory_order_store import MemoryOrderStore
from repositories.order_store import OrderStore


def build_store(config: Settings) -> OrderStore:
    if config.order_store not in STORE_BACKENDS:
        raise RuntimeError(f"Unsupported ORDER_STORE: {config.order_store}")
    if config.order_store == "supabase":
        from repositories.supabase_order_store import SupabaseOrderStore
        from supabase_client import get_supabase

        return SupabaseOrderStore(get_supabase(), table_name=config.orders_table)
    return MemoryOrderStore()
