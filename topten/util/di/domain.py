"""Domain layer DI providers."""

from dishka import Scope, provide

from topten.adapter.google import GoogleOAuthClient
from topten.config import AuthSettings
from topten.domain.repository import (
    CategoryRepository,
    TopTenListRepository,
    UserRepository,
    VoteRepository,
)
from topten.domain.service import (
    AuthService,
    CategoryService,
    ListService,
    UserService,
    VoteService,
)
from topten.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self,
        user_repository: UserRepository,
        identity_client: GoogleOAuthClient,
        auth_settings: AuthSettings,
    ) -> AuthService:
        """Provide authentication domain service."""
        return AuthService(
            user_repository=user_repository,
            identity_client=identity_client,
            auth_settings=auth_settings,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        list_repository: TopTenListRepository,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            list_repository=list_repository,
        )

    @provide
    def get_list_service(
        self,
        list_repository: TopTenListRepository,
        category_repository: CategoryRepository,
    ) -> ListService:
        """Provide list domain service."""
        return ListService(
            list_repository=list_repository,
            category_repository=category_repository,
        )

    @provide
    def get_category_service(
        self, category_repository: CategoryRepository
    ) -> CategoryService:
        """Provide category domain service."""
        return CategoryService(category_repository=category_repository)
