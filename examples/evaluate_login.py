"""Evaluate a typing sample against a KeyID profile using env configuration."""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from keyid_client import LicenseError, TransportError, connect


async def main(entity_id: str, sample: str) -> None:
    async with connect() as client:
        try:
            result = await client.login(entity_id, sample, session_id=os.getenv("KEYID_SESSION_ID", ""))
        except LicenseError as exc:
            print(f"license rejected: {exc}")
            return
        except TransportError as exc:
            print(f"service unavailable: {exc}")
            return

    print(f"entity={result.entity_id} matched={result.matched} ready={result.is_ready}")
    print(f"confidence={result.confidence:.1f} fidelity={result.fidelity:.1f} error={result.error_kind.value}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) != 3:
        raise SystemExit("usage: evaluate_login.py ENTITY_ID TYPING_SAMPLE")
    asyncio.run(main(sys.argv[1], sys.argv[2]))
