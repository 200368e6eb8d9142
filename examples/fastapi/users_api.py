"""
Users API served through the negotiation pipeline.

This example demonstrates:
- Mounting NegotiationApp under a FastAPI app
- Path versioning (/api/v1/...)
- Responding in JSON, XML or plain text depending on the request
- Registering a custom CSV format

Usage:
------
    uvicorn users_api:app --reload

    curl localhost:8000/api/v1/users.json
    curl -H "Accept: application/xml" localhost:8000/api/v1/users
    curl localhost:8000/api/v1/users?format=csv
    curl -X POST -d '{"name": "Ann"}' localhost:8000/api/v1/users.json
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI

from content_negotiation.config import FormatterConfig
from content_negotiation.constants import FORM_HASH
from content_negotiation.fastapi import NegotiationApp
from content_negotiation.formats import Codec

logger = logging.getLogger(__name__)

USERS = [{"id": 1, "name": "Grace"}, {"id": 2, "name": "Alan"}]


def encode_csv(value):
    rows = value if isinstance(value, list) else [value]
    if not rows:
        return ""
    columns = list(rows[0])
    lines = [",".join(columns)]
    lines.extend(",".join(str(row.get(column, "")) for column in columns) for row in rows)
    return "\n".join(lines) + "\n"


def users_handler(context):
    if context.path != "/users":
        return HTTPStatus.NOT_FOUND.value, {}, [{"error": "not found"}]

    form = context.get(FORM_HASH)
    if isinstance(form, dict):
        user = {"id": len(USERS) + 1, "name": form.get("name")}
        USERS.append(user)
        logger.info("Created user %s", user["id"])
        return HTTPStatus.CREATED.value, {}, [user]

    return HTTPStatus.OK.value, {}, [USERS]


config = FormatterConfig(
    content_types={"csv": "text/csv"},
    formatters={"csv": Codec(encode=encode_csv)},
    default_format="json",
)

app = FastAPI(title="Users API")
app.mount(
    "/api",
    NegotiationApp(users_handler, config=config, version_strategy="path", versions=["v1"]),
)
