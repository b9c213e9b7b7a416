from __future__ import annotations

import os
import time
import uuid

import requests
from rich import print

BASE = os.getenv("API_BASE_URL", "http://127.0.0.1:8080")

def post(path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    headers = {"content-type": "application/json"}
    if jwt:
        headers["authorization"] = f"Bearer {jwt}"
    return requests.post(f"{BASE}{path}", headers=headers, json=json, timeout=10)

def get(path: str, *, jwt: str | None = None) -> requests.Response:
    headers = {}
    if jwt:
        headers["authorization"] = f"Bearer {jwt}"
    return requests.get(f"{BASE}{path}", headers=headers, timeout=10)

def register(first_name: str, email: str, password: str = "password123") -> str:
    r = post(
        "/auth/register",
        json={"firstName": first_name, "lastName": "Demo", "email": email, "password": password},
    )
    r.raise_for_status()
    return r.json()["token"]

def login(email: str, password: str = "password123") -> dict:
    r = post("/auth/login", json={"email": email, "password": password})
    r.raise_for_status()
    return r.json()["data"]

def wait_ready(timeout_s: float = 30.0) -> None:
    deadline = time.time() + timeout_s
    last_err: Exception | None = None

    while time.time() < deadline:
        try:
            r = get("/ready")
            if r.status_code == 200:
                return
        except requests.RequestException as e:
            last_err = e
        time.sleep(0.5)

    if last_err:
        raise RuntimeError(f"api not ready after {timeout_s}s (last error: {last_err})")
    raise RuntimeError(f"api not ready after {timeout_s}s")

def main() -> None:
    print("[bold]demo: register -> create org -> access denied -> add member -> access ok[/bold]")

    wait_ready()
    print("[green]ready ok[/green]")

    suffix = uuid.uuid4().hex[:8]
    alice_email = f"alice+{suffix}@example.com"
    bob_email = f"bob+{suffix}@example.com"

    register("Alice", alice_email)
    register("Bob", bob_email)
    alice = login(alice_email)
    bob = login(bob_email)
    print("registered:", alice["user"]["userId"], bob["user"]["userId"])

    r = post("/api/organisations", jwt=alice["accessToken"], json={"name": "Org1", "description": "demo"})
    r.raise_for_status()
    org_id = r.json()["data"]["orgId"]
    print("alice created org:", org_id)

    r = get(f"/api/organisations/{org_id}", jwt=bob["accessToken"])
    print("bob views org before joining:", r.status_code)

    r = post(f"/api/organisations/{org_id}/users", jwt=alice["accessToken"], json={"userId": bob["user"]["userId"]})
    r.raise_for_status()
    print("alice added bob")

    r = get(f"/api/organisations/{org_id}", jwt=bob["accessToken"])
    r.raise_for_status()
    print("bob views org after joining:", r.status_code)

    r = get(f"/api/users/{bob['user']['userId']}", jwt=alice["accessToken"])
    r.raise_for_status()
    print("alice views bob:", r.json()["data"]["email"])

    r = get("/api/organisations", jwt=bob["accessToken"])
    r.raise_for_status()
    print("bob's organisations:", [o["name"] for o in r.json()["data"]["organisations"]])
    print("[bold green]demo complete[/bold green]")

if __name__ == "__main__":
    main()
