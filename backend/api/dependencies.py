"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The storage backend (in-memory or Supabase) is chosen here from
settings; nothing else in the codebase knows which one is active.
"""

from typing import TYPE_CHECKING, Any, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.activity.interfaces import IActivityBroadcaster, IActivityStore
    from modules.activity.service import AuditLogger
    from modules.auth.interfaces import ICredentialStore
    from modules.auth.rate_limit import SlidingWindowRateLimiter
    from modules.auth.service import AuthService
    from modules.auth.tokens import TokenService
    from modules.comments.interfaces import ICommentStore
    from modules.comments.service import CommentService
    from modules.recipes.interfaces import IAssetUploader, IRecipeStore
    from modules.recipes.service import RecipeService


class ServiceContainer:
    """
    Container for all service instances.

    Services and stores are created lazily on first access and cached
    as singletons within the container. Use reset() to clear them.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._supabase: Any = None
        self._credential_store: "ICredentialStore | None" = None
        self._recipe_store: "IRecipeStore | None" = None
        self._activity_store: "IActivityStore | None" = None
        self._comment_store: "ICommentStore | None" = None
        self._uploader: "IAssetUploader | None" = None
        self._tokens: "TokenService | None" = None
        self._auth_service: "AuthService | None" = None
        self._rate_limiter: "SlidingWindowRateLimiter | None" = None
        self._broadcaster: "IActivityBroadcaster | None" = None
        self._audit: "AuditLogger | None" = None
        self._recipe_service: "RecipeService | None" = None
        self._comment_service: "CommentService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def uses_supabase(self) -> bool:
        return self.settings.storage_backend == "supabase"

    def _supabase_client(self) -> Any:
        if self._supabase is None:
            from shared.database import get_supabase_client
            self._supabase = get_supabase_client()
        return self._supabase

    # -------------------------------------------------------------------------
    # Stores
    # -------------------------------------------------------------------------

    @property
    def credential_store(self) -> "ICredentialStore":
        """Get the credential store instance."""
        if self._credential_store is None:
            if self.uses_supabase:
                from modules.auth.repository import SupabaseCredentialStore
                self._credential_store = SupabaseCredentialStore(self._supabase_client())
            else:
                from modules.auth.repository import InMemoryCredentialStore
                self._credential_store = InMemoryCredentialStore()
        return self._credential_store

    @property
    def recipe_store(self) -> "IRecipeStore":
        """Get the recipe store instance."""
        if self._recipe_store is None:
            if self.uses_supabase:
                from modules.recipes.repository import SupabaseRecipeStore
                self._recipe_store = SupabaseRecipeStore(self._supabase_client())
            else:
                from modules.recipes.repository import InMemoryRecipeStore
                self._recipe_store = InMemoryRecipeStore()
        return self._recipe_store

    @property
    def activity_store(self) -> "IActivityStore":
        """Get the activity store instance."""
        if self._activity_store is None:
            if self.uses_supabase:
                from modules.activity.repository import SupabaseActivityStore
                self._activity_store = SupabaseActivityStore(self._supabase_client())
            else:
                from modules.activity.repository import InMemoryActivityStore
                self._activity_store = InMemoryActivityStore()
        return self._activity_store

    @property
    def comment_store(self) -> "ICommentStore":
        """Get the comment store instance."""
        if self._comment_store is None:
            if self.uses_supabase:
                from modules.comments.repository import SupabaseCommentStore
                self._comment_store = SupabaseCommentStore(self._supabase_client())
            else:
                from modules.comments.repository import InMemoryCommentStore
                self._comment_store = InMemoryCommentStore()
        return self._comment_store

    @property
    def uploader(self) -> "IAssetUploader":
        """Get the image uploader instance."""
        if self._uploader is None:
            if self.uses_supabase:
                from modules.recipes.uploads import SupabaseStorageUploader
                self._uploader = SupabaseStorageUploader(
                    self._supabase_client(), self.settings.upload_bucket
                )
            else:
                from modules.recipes.uploads import InMemoryAssetUploader
                self._uploader = InMemoryAssetUploader()
        return self._uploader

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def tokens(self) -> "TokenService":
        if self._tokens is None:
            from modules.auth.tokens import TokenService
            self._tokens = TokenService(self.settings)
        return self._tokens

    @property
    def auth(self) -> "AuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                store=self.credential_store,
                tokens=self.tokens,
                settings=self.settings,
            )
        return self._auth_service

    @property
    def rate_limiter(self) -> "SlidingWindowRateLimiter":
        """Get the limiter shared by all auth routes."""
        if self._rate_limiter is None:
            from modules.auth.rate_limit import SlidingWindowRateLimiter
            self._rate_limiter = SlidingWindowRateLimiter(
                max_requests=self.settings.auth_rate_limit_requests,
                window_seconds=self.settings.auth_rate_limit_window,
            )
        return self._rate_limiter

    @property
    def broadcaster(self) -> "IActivityBroadcaster":
        """BroadcastHub when push is enabled, otherwise a no-op."""
        if self._broadcaster is None:
            from modules.activity.broadcast import BroadcastHub, NullBroadcaster
            if self.settings.broadcast_enabled:
                self._broadcaster = BroadcastHub(queue_size=self.settings.broadcast_queue_size)
            else:
                self._broadcaster = NullBroadcaster()
        return self._broadcaster

    @property
    def audit(self) -> "AuditLogger":
        """Get the audit logger instance."""
        if self._audit is None:
            from modules.activity.service import AuditLogger
            self._audit = AuditLogger(
                store=self.activity_store,
                users=self.credential_store,
                broadcaster=self.broadcaster,
                default_limit=self.settings.activity_default_limit,
                max_limit=self.settings.activity_max_limit,
            )
        return self._audit

    @property
    def recipes(self) -> "RecipeService":
        """Get the recipe lifecycle service instance."""
        if self._recipe_service is None:
            from modules.recipes.service import RecipeService
            self._recipe_service = RecipeService(
                store=self.recipe_store,
                audit=self.audit,
                uploader=self.uploader,
                bulk_max_ids=self.settings.bulk_max_ids,
                upload_max_bytes=self.settings.upload_max_bytes,
            )
        return self._recipe_service

    @property
    def comments(self) -> "CommentService":
        """Get the comment service instance."""
        if self._comment_service is None:
            from modules.comments.service import CommentService
            self._comment_service = CommentService(
                store=self.comment_store,
                recipes=self.recipe_store,
                auth=self.auth,
            )
        return self._comment_service

    def reset(self) -> None:
        """
        Reset all cached services and stores.

        In-memory stores are dropped along with their contents.
        """
        self.__init__(self._settings)


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances and empty in-memory stores.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "AuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_auth_rate_limiter() -> "SlidingWindowRateLimiter":
    """FastAPI dependency for the auth rate limiter."""
    return get_container().rate_limiter


def get_recipe_service() -> "RecipeService":
    """FastAPI dependency for recipe service."""
    return get_container().recipes


def get_comment_service() -> "CommentService":
    """FastAPI dependency for comment service."""
    return get_container().comments


def get_audit_logger() -> "AuditLogger":
    """FastAPI dependency for the audit logger."""
    return get_container().audit


def get_broadcaster() -> "IActivityBroadcaster":
    """FastAPI dependency for the push channel."""
    return get_container().broadcaster
