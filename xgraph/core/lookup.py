"""Handle to account id resolution via UserByScreenName."""

from xgraph.config import ClientConfig
from xgraph.core.pagination import encode_param
from xgraph.core.transport import Transport
from xgraph.exceptions import ProfileNotFoundError
from xgraph.models.timeline import UserLookupResponse

USER_LOOKUP_FEATURES: dict[str, bool] = {
    "hidden_profile_subscriptions_enabled": True,
    "responsive_web_graphql_exclude_directive_enabled": True,
    "verified_phone_label_enabled": False,
    "subscriptions_verification_info_is_identity_verified_enabled": True,
    "subscriptions_verification_info_verified_since_enabled": True,
    "highlights_tweets_tab_ui_enabled": True,
    "responsive_web_twitter_article_notes_tab_enabled": True,
    "creator_subscriptions_tweet_preview_api_enabled": True,
    "responsive_web_graphql_skip_user_profile_image_extensions_enabled": False,
    "responsive_web_graphql_timeline_navigation_enabled": True,
}


def normalize_handle(handle: str) -> str:
    return handle.strip().lstrip("@")


class UserLookup:
    """Resolves @handles to numeric account ids."""

    def __init__(self, transport: Transport, config: ClientConfig | None = None):
        self.transport = transport
        self.config = config or ClientConfig()

    def build_url(self, handle: str) -> str:
        variables = {"screen_name": normalize_handle(handle), "withSafetyModeUserFields": True}
        return (
            f"{self.config.graphql_base_url}/i/api/graphql/"
            f"{self.config.user_by_screen_name_query_id}/UserByScreenName"
            f"?variables={encode_param(variables)}&features={encode_param(USER_LOOKUP_FEATURES)}"
        )

    async def get_user_id(self, handle: str) -> str:
        """
        Resolve a handle to its account id.

        Args:
            handle: X/Twitter handle, with or without @

        Returns:
            Numeric account id as a string

        Raises:
            ProfileNotFoundError: Handle unknown, suspended or unavailable
        """
        response, _ = await self.transport.get(self.build_url(handle), UserLookupResponse)
        user = response.user
        if user is None or user.is_unavailable or not user.rest_id:
            raise ProfileNotFoundError(f"Profile @{normalize_handle(handle)} not found")
        return user.rest_id
