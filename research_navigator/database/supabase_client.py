from supabase import create_client, Client, ClientOptions
from research_navigator.config import settings


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            settings.validate_required()
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def for_user(cls, access_token: str) -> Client:
        """Client that sends the user's JWT, so row-level security scopes every query."""
        settings.validate_required()
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(headers={"Authorization": f"Bearer {access_token}"}),
        )

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
