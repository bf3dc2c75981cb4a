"""
Manual end-to-end check against a running server.

Creates a user, edits it, deletes it, printing the store state
after each step:
    python scripts/smoke_test.py [base_url]
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.client.api_client import UsersApiClient
from app.client.form import UserForm
from app.client.store import UserStore


def print_state(step: str, store: UserStore):
    print(f"\n== {step}")
    print(f"   users:   {len(store.users)}")
    if store.success:
        print(f"   ✅ {store.success}")
    if store.error:
        print(f"   ❌ {store.error}")


async def main(base_url: str):
    print(f"🧪 Testing API: {base_url}")

    async with UsersApiClient(base_url=base_url, timeout=10.0) as api:
        store = UserStore(api)
        await store.refresh()
        print_state("List", store)

        form = UserForm()
        for name, value in {
            "name": "Smoke Test",
            "age": "30",
            "city": "Nowhere",
            "email": "smoke@example.com",
            "hobbies": "reading, coding, ",
        }.items():
            form.set_field(name, value)

        await store.submit(form)
        print_state("Create", store)

        created = next((u for u in store.users if u["email"] == "smoke@example.com"), None)
        if created is None:
            print("\n❌ Created user not found in list")
            return

        form.start_edit(created)
        form.set_field("city", "Somewhere")
        await store.submit(form)
        print_state("Update", store)

        await store.delete(created["_id"])
        print_state("Delete", store)

        store.close()


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "http://localhost:5000"))
