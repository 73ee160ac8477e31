"""Validation script - fetch live Following pages and save them as fixtures."""

import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path

from xgraph import GraphClient, ClientConfig
from xgraph.core.decoder import decode_timeline
from xgraph.core.pagination import build_following_url
from xgraph.exceptions import XGraphError
from xgraph.models.timeline import RelationshipTimeline

# Handles to check
HANDLES = [
    "X",
    "elonmusk",
]

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


async def validate_account(client: GraphClient, handle: str, save_fixture: bool = True) -> dict:
    """Resolve, fetch and decode the first Following page of one account."""
    print(f"\n{'='*60}")
    print(f"@{handle}")
    print(f"{'='*60}")

    start = datetime.now()

    try:
        user_id = await client.get_user_id(handle)
        # Raw body, so the fixture keeps fields the schema ignores
        raw, _ = await client.transport.get(
            build_following_url(user_id, 20, config=client.config),
            dict,
        )
    except XGraphError as e:
        print(f"❌ {e}")
        return {"handle": handle, "success": False, "error": str(e)}

    duration_ms = (datetime.now() - start).total_seconds() * 1000
    print(f"✓ Fetched id {user_id} in {duration_ms:.0f}ms")

    if save_fixture:
        FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
        fixture_path = FIXTURES_DIR / f"following_{handle.lower()}.json"
        fixture_path.write_text(json.dumps(raw, indent=2), encoding="utf-8")
        print(f"✓ Saved fixture: {fixture_path}")

    page = decode_timeline(RelationshipTimeline.model_validate(raw))

    print(f"\n--- Profiles ({len(page.profiles)} decoded) ---")
    for p in page.profiles[:5]:
        print(f"  {p.id:>20}  @{p.username:<20} {p.followers_count:>12,} followers")
    print(f"  next: {page.next}")
    print(f"  previous: {page.previous}")

    return {
        "handle": handle,
        "success": bool(page.profiles) and page.next is not None,
        "profiles": len(page.profiles),
    }


async def main() -> int:
    config = ClientConfig()
    if not config.has_session:
        print("Set XGRAPH_AUTH_TOKEN and XGRAPH_CT0 first")
        return 1

    async with GraphClient(config) as client:
        results = []
        for handle in HANDLES:
            results.append(await validate_account(client, handle))
            await asyncio.sleep(config.request_delay_ms / 1000)

    print(f"\n{'='*60}")
    for r in results:
        status = "✓" if r["success"] else "❌"
        print(f"{status} @{r['handle']}: {r.get('profiles', r.get('error'))}")

    return 0 if all(r["success"] for r in results) else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
