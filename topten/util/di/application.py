"""Application layer DI providers."""

from dishka import Scope, provide

from topten.application.usecase.auth import (
    CompleteFederatedLoginUseCase,
    ConfirmPasswordResetUseCase,
    GetCurrentUserUseCase,
    InitiateFederatedLoginUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    SignupUseCase,
)
from topten.application.usecase.category import ListCategoriesUseCase
from topten.application.usecase.list import (
    CreateListUseCase,
    DeleteListUseCase,
    GetListUseCase,
    ListAssembler,
    ListListsUseCase,
    UpdateListUseCase,
)
from topten.application.usecase.vote import (
    CastVoteUseCase,
    ListVotesUseCase,
    RemoveVoteUseCase,
)
from topten.config import Settings
from topten.domain.repository import VoteRepository
from topten.domain.service import (
    AuthService,
    CategoryService,
    ListService,
    UserService,
    VoteService,
)
from topten.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_signup_use_case(self, auth_service: AuthService) -> SignupUseCase:
        """Provide signup use case."""
        return SignupUseCase(auth_service=auth_service)

    @provide
    def get_login_use_case(self, auth_service: AuthService) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(auth_service=auth_service)

    @provide
    def get_initiate_federated_login_use_case(
        self, auth_service: AuthService
    ) -> InitiateFederatedLoginUseCase:
        """Provide initiate federated login use case."""
        return InitiateFederatedLoginUseCase(auth_service=auth_service)

    @provide
    def get_complete_federated_login_use_case(
        self, auth_service: AuthService
    ) -> CompleteFederatedLoginUseCase:
        """Provide complete federated login use case."""
        return CompleteFederatedLoginUseCase(auth_service=auth_service)

    @provide
    def get_current_user_use_case(
        self, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service)

    @provide
    def get_request_password_reset_use_case(
        self, auth_service: AuthService, settings: Settings
    ) -> RequestPasswordResetUseCase:
        """Provide request password reset use case."""
        return RequestPasswordResetUseCase(auth_service=auth_service, settings=settings)

    @provide
    def get_confirm_password_reset_use_case(
        self, auth_service: AuthService
    ) -> ConfirmPasswordResetUseCase:
        """Provide confirm password reset use case."""
        return ConfirmPasswordResetUseCase(auth_service=auth_service)

    # Vote use cases
    @provide
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide
    def get_remove_vote_use_case(
        self, vote_service: VoteService
    ) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(vote_service=vote_service)

    @provide
    def get_list_votes_use_case(
        self, vote_service: VoteService, category_service: CategoryService
    ) -> ListVotesUseCase:
        """Provide list votes use case."""
        return ListVotesUseCase(
            vote_service=vote_service, category_service=category_service
        )

    # List use cases
    @provide
    def get_list_assembler(
        self,
        user_service: UserService,
        category_service: CategoryService,
        vote_repository: VoteRepository,
    ) -> ListAssembler:
        """Provide list response assembler."""
        return ListAssembler(
            user_service=user_service,
            category_service=category_service,
            vote_repository=vote_repository,
        )

    @provide
    def get_create_list_use_case(
        self, list_service: ListService, assembler: ListAssembler
    ) -> CreateListUseCase:
        """Provide create list use case."""
        return CreateListUseCase(list_service=list_service, assembler=assembler)

    @provide
    def get_get_list_use_case(
        self, list_service: ListService, assembler: ListAssembler
    ) -> GetListUseCase:
        """Provide get list use case."""
        return GetListUseCase(list_service=list_service, assembler=assembler)

    @provide
    def get_update_list_use_case(
        self, list_service: ListService, assembler: ListAssembler
    ) -> UpdateListUseCase:
        """Provide update list use case."""
        return UpdateListUseCase(list_service=list_service, assembler=assembler)

    @provide
    def get_delete_list_use_case(self, list_service: ListService) -> DeleteListUseCase:
        """Provide delete list use case."""
        return DeleteListUseCase(list_service=list_service)

    @provide
    def get_list_lists_use_case(
        self, list_service: ListService, assembler: ListAssembler
    ) -> ListListsUseCase:
        """Provide list lists use case."""
        return ListListsUseCase(list_service=list_service, assembler=assembler)

    # Category use cases
    @provide
    def get_list_categories_use_case(
        self, category_service: CategoryService
    ) -> ListCategoriesUseCase:
        """Provide list categories use case."""
        return ListCategoriesUseCase(category_service=category_service)
