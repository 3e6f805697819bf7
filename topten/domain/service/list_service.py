"""Top ten list domain service."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

import logfire

from topten.domain.error import (
    ConstraintViolationError,
    ForbiddenError,
    NotFoundError,
    StorageFailureError,
    ValidationError,
)
from topten.domain.model import MAX_LIST_ITEMS, ListItem, TopTenList
from topten.domain.model.common import utc_now
from topten.domain.repository import (
    CategoryRepository,
    ListQuery,
    TopTenListRepository,
)
from topten.domain.value import CategoryId, ListId, ListItemId, Slug, UserId
from topten.util.slug import generate_unique_slug, slugify

from .base import Service

TITLE_MAX_LENGTH = 200
MAX_SLUG_ATTEMPTS = 3
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class ListItemDraft:
    """Item as submitted by the author; rank comes from its position."""

    title: str
    description: str | None = None
    image_url: str | None = None


class ListService(Service):
    """Domain service for list authoring and browsing."""

    def __init__(
        self,
        list_repository: TopTenListRepository,
        category_repository: CategoryRepository,
    ) -> None:
        """Initialize list service.

        Args:
            list_repository: Top ten list repository
            category_repository: Category repository
        """
        self.list_repository = list_repository
        self.category_repository = category_repository

    async def create_list(
        self,
        owner_id: UserId,
        title: str,
        category_id: CategoryId | None,
        items: list[ListItemDraft],
        description: str | None = None,
        is_public: bool = True,
    ) -> TopTenList:
        """Create a list with its ranked items.

        Raises:
            ValidationError: Missing title/category, bad item count, or
                unknown category
        """
        with logfire.span("list_service.create_list", owner_id=str(owner_id)):
            if not title or not title.strip() or category_id is None:
                raise ValidationError("Title and category are required")
            self._check_title(title)
            self._check_items(items)
            await self._check_category(category_id)

            list_id = ListId(uuid4())
            for attempt in range(1, MAX_SLUG_ATTEMPTS + 1):
                top_ten_list = TopTenList(
                    id=list_id,
                    slug=self._new_slug(title),
                    title=title,
                    description=description or None,
                    user_id=owner_id,
                    category_id=category_id,
                    is_public=is_public,
                    items=self._build_items(items),
                )
                try:
                    created = await self.list_repository.create(top_ten_list)
                except ConstraintViolationError as e:
                    logfire.warn(
                        "List slug collision, retrying",
                        constraint=e.constraint,
                        attempt=attempt,
                    )
                    continue
                logfire.info(
                    "List created",
                    list_id=str(created.id),
                    owner_id=str(owner_id),
                    items=len(created.items),
                )
                return created

            raise StorageFailureError("create_list exhausted slug retries")

    async def get_list(
        self, id_or_slug: str, viewer_id: UserId | None = None
    ) -> TopTenList:
        """Fetch a list by UUID or slug.

        Private lists are reported as missing to everyone but their owner.

        Raises:
            NotFoundError: If absent or not visible to the viewer
        """
        with logfire.span("list_service.get_list", id_or_slug=id_or_slug):
            top_ten_list = await self._find_by_id_or_slug(id_or_slug)
            if not top_ten_list or not top_ten_list.is_visible_to(viewer_id):
                raise NotFoundError("List", id_or_slug)
            return top_ten_list

    async def update_list(
        self, owner_id: UserId, list_id: ListId, changes: dict[str, Any]
    ) -> TopTenList:
        """Apply changes to a list the caller owns.

        ``changes`` holds only the fields being changed: title, description,
        category_id, is_public, items (a list of ListItemDraft replacing
        all current items).

        Raises:
            NotFoundError: If the list does not exist
            ForbiddenError: If the caller does not own it
            ValidationError: If a changed field is invalid
        """
        with logfire.span(
            "list_service.update_list", owner_id=str(owner_id), list_id=str(list_id)
        ):
            existing = await self._get_owned(
                owner_id, list_id, "You can only edit your own lists"
            )

            update: dict[str, Any] = {"updated_at": utc_now()}
            if changes.get("title"):
                self._check_title(changes["title"])
                update["title"] = changes["title"]
            if "description" in changes:
                update["description"] = changes["description"] or None
            if changes.get("category_id"):
                await self._check_category(changes["category_id"])
                update["category_id"] = changes["category_id"]
            if changes.get("is_public") is not None:
                update["is_public"] = changes["is_public"]
            if changes.get("items") is not None:
                self._check_items(changes["items"])
                update["items"] = self._build_items(changes["items"])

            updated = await self.list_repository.update(
                existing.model_copy(update=update)
            )
            logfire.info(
                "List updated",
                list_id=str(list_id),
                fields=sorted(k for k in update if k != "updated_at"),
            )
            return updated

    async def delete_list(self, owner_id: UserId, list_id: ListId) -> None:
        """Delete a list the caller owns, with its items and votes.

        Raises:
            NotFoundError: If the list does not exist
            ForbiddenError: If the caller does not own it
        """
        with logfire.span(
            "list_service.delete_list", owner_id=str(owner_id), list_id=str(list_id)
        ):
            await self._get_owned(
                owner_id, list_id, "You can only delete your own lists"
            )
            await self.list_repository.delete(list_id)
            logfire.info("List deleted", list_id=str(list_id))

    async def browse(
        self,
        category_slug: str | None = None,
        user_id: UserId | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> tuple[list[TopTenList], int]:
        """Page through lists, most voted first.

        Without a user filter only public lists are returned; with one, all
        of that user's lists are.

        Returns:
            Lists on the page and the total number matching
        """
        with logfire.span(
            "list_service.browse",
            category=category_slug,
            user_id=str(user_id) if user_id else None,
            page=page,
        ):
            page = max(page, 1)
            limit = min(max(limit, 1), MAX_PAGE_SIZE)

            category_id = None
            if category_slug:
                category = await self.category_repository.find_by_slug(category_slug)
                if not category:
                    return [], 0
                category_id = category.id

            return await self.list_repository.find_page(
                ListQuery(
                    category_id=category_id,
                    user_id=user_id,
                    public_only=user_id is None,
                    offset=(page - 1) * limit,
                    limit=limit,
                )
            )

    async def _find_by_id_or_slug(self, id_or_slug: str) -> TopTenList | None:
        try:
            list_id = ListId(UUID(id_or_slug))
        except ValueError:
            list_id = None
        if list_id is not None:
            found = await self.list_repository.find_by_id(list_id)
            if found:
                return found
        try:
            slug = Slug(id_or_slug)
        except ValueError:
            return None
        return await self.list_repository.find_by_slug(slug)

    async def _get_owned(
        self, owner_id: UserId, list_id: ListId, forbidden_message: str
    ) -> TopTenList:
        existing = await self.list_repository.find_by_id(list_id)
        if not existing:
            raise NotFoundError("List", str(list_id))
        if existing.user_id != owner_id:
            logfire.warn(
                "List ownership check failed",
                list_id=str(list_id),
                user_id=str(owner_id),
            )
            raise ForbiddenError(forbidden_message)
        return existing

    async def _check_category(self, category_id: CategoryId) -> None:
        if not await self.category_repository.find_by_id(category_id):
            raise ValidationError("Invalid category")

    @staticmethod
    def _check_title(title: str) -> None:
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError("Title must be 200 characters or fewer")

    @staticmethod
    def _check_items(items: list[ListItemDraft]) -> None:
        if not items:
            raise ValidationError("At least one list item is required")
        if len(items) > MAX_LIST_ITEMS:
            raise ValidationError("Maximum 10 items allowed per list")
        for item in items:
            if not item.title or not item.title.strip():
                raise ValidationError("Every list item needs a title")
            if len(item.title) > TITLE_MAX_LENGTH:
                raise ValidationError("Item titles must be 200 characters or fewer")

    @staticmethod
    def _build_items(items: list[ListItemDraft]) -> list[ListItem]:
        return [
            ListItem(
                id=ListItemId(uuid4()),
                rank=index + 1,
                title=item.title,
                description=item.description or None,
                image_url=item.image_url or None,
            )
            for index, item in enumerate(items)
        ]

    @staticmethod
    def _new_slug(title: str) -> Slug:
        base = title if slugify(title) else "list"
        return Slug(generate_unique_slug(base))
