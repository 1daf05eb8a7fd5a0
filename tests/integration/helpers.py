import uuid

from httpx import AsyncClient


async def register_and_login(client: AsyncClient, full_name: str) -> dict[str, str]:
    """Fresh user with a saved profile; returns auth headers."""
    uid = uuid.uuid4().hex[:8]
    creds = {"username": f"user_{uid}", "email": f"{uid}@example.com", "password": "Trekking1"}
    await client.post("/api/v1/auth/register", json=creds)
    login = await client.post(
        "/api/v1/auth/login", json={"username": creds["username"], "password": creds["password"]}
    )
    headers = {"Authorization": f"Bearer {login.json()['data']['access_token']}"}
    await client.put(
        "/api/v1/profile",
        headers=headers,
        json={
            "full_name": full_name,
            "school_email": f"{uid}@upenn.edu",
            "cohort": "WG26",
            "area_code": "+1",
            "phone_digits": "2155550100",
            "venmo_handle": f"v-{uid}",
            "bio": "integration test user",
        },
    )
    return headers
