from eventhub.integrations.supabase.client import supabase_client, SupabaseClient
from eventhub.integrations.supabase.auth import sign_in, current_identity
from eventhub.integrations.supabase.storage import SupabaseStorage

__all__ = [
    "supabase_client",
    "SupabaseClient",
    "sign_in",
    "current_identity",
    "SupabaseStorage",
]
