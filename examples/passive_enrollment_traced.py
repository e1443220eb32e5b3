"""Passive-enrollment login with workflow spans persisted to PostgreSQL.

Set KEYID_URL, KEYID_LICENSE and KEYID_TRACE_DSN (or DATABASE_URL); the
``keyid_workflow_traces`` table is defined in ``schema/postgres.sql``.
"""

from __future__ import annotations

import asyncio
import sys

from keyid_client import connect
from keyid_client.exporters import create_exporter_from_env


async def main(entity_id: str, sample: str) -> None:
    exporter = create_exporter_from_env()
    async with connect(service_name="passive-enrollment-demo", exporter=exporter, passive_enrollment=True) as client:
        result = await client.login(entity_id, sample, session_id="demo-session")
    print(result.to_dict())


if __name__ == "__main__":
    if len(sys.argv) != 3:
        raise SystemExit("usage: passive_enrollment_traced.py ENTITY_ID TYPING_SAMPLE")
    asyncio.run(main(sys.argv[1], sys.argv[2]))
