"""Unit tests for the domain error handler."""

import json

import pytest
from starlette.requests import Request

from topten.domain.error import (
    AlreadyVotedError,
    NotFoundError,
    StorageFailureError,
)
from topten.interface.error import GENERIC_ERROR_MESSAGE, domain_error_handler


def make_request(path: str = "/votes") -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": path,
            "query_string": b"",
            "headers": [],
        }
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, status_code, detail",
    [
        (AlreadyVotedError(), 400, "You already voted for this list"),
        (NotFoundError("List"), 404, "List not found"),
    ],
)
async def test_domain_error_maps_to_status_and_message(error, status_code, detail):
    response = await domain_error_handler(make_request(), error)

    assert response.status_code == status_code
    assert json.loads(response.body) == {"detail": detail}


@pytest.mark.asyncio
async def test_storage_failure_hides_detail():
    error = StorageFailureError("cast_vote exhausted retries")

    response = await domain_error_handler(make_request(), error)

    assert response.status_code == 500
    assert json.loads(response.body) == {"detail": GENERIC_ERROR_MESSAGE}
