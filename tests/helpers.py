
from datetime import UTC, datetime
from typing import Any

from httpx import AsyncClient


class Account:
    def __init__(self, token: str, user: dict[str, Any]) -> None:
        self.token = token
        self.user = user
        self.id = user["id"]
        self.email = user["email"]
        self.headers = {"Authorization": f"Bearer {token}"}


async def register(client: AsyncClient, email: str, name: str | None = "Test User",
                   password: str = "password123") -> Account:
    body = {"email": email, "password": password}
    if name is not None:
        body["name"] = name
    response = await client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    return Account(data["token"], data["user"])


async def create_project(client: AsyncClient, account: Account, name: str = "Launch plan") -> dict:
    response = await client.post("/api/projects", json={"name": name}, headers=account.headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def add_member(client: AsyncClient, owner: Account, project_id: str, member: Account) -> dict:
    response = await client.post(f"/api/projects/{project_id}/members",
                                 json={"email": member.email}, headers=owner.headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_task(client: AsyncClient, account: Account, project_id: str, **fields) -> dict:
    body = {"title": "Write copy", "description": "Landing page text", "projectId": project_id}
    body.update(fields)
    response = await client.post("/api/tasks", json=body, headers=account.headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def iso(value: datetime) -> str:
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")
