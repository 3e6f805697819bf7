"""List use cases."""

from .common import ListAssembler, ListAuthor, ListDetail, ListItemInfo, ListItemInput
from .create_list import CreateListRequest, CreateListResponse, CreateListUseCase
from .delete_list import DeleteListRequest, DeleteListResponse, DeleteListUseCase
from .get_list import GetListRequest, GetListResponse, GetListUseCase
from .list_lists import ListListsRequest, ListListsResponse, ListListsUseCase, Pagination
from .update_list import UpdateListRequest, UpdateListResponse, UpdateListUseCase

__all__ = [
    "ListAssembler",
    "ListAuthor",
    "ListDetail",
    "ListItemInfo",
    "ListItemInput",
    "CreateListRequest",
    "CreateListResponse",
    "CreateListUseCase",
    "DeleteListRequest",
    "DeleteListResponse",
    "DeleteListUseCase",
    "GetListRequest",
    "GetListResponse",
    "GetListUseCase",
    "ListListsRequest",
    "ListListsResponse",
    "ListListsUseCase",
    "Pagination",
    "UpdateListRequest",
    "UpdateListResponse",
    "UpdateListUseCase",
]
