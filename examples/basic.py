"""Basic example: build entries and send them to a LogFlux agent.

Run with:
    LOGFLUX_AGENT_URL=unix:///tmp/logflux-agent.sock python examples/basic.py

Without a running agent the entries are printed as NDJSON instead.
"""

import sys

from logflux import (
    AgentConnectionError,
    Client,
    Entry,
    Level,
    encode_entries,
    generic_entry,
    metric_entry,
)

basic_entry = Entry("Hello from Python SDK!")

detailed_entry = (
    Entry("User login attempt")
    .with_source("python-example")
    .with_level(Level.INFO)
    .with_label("user_id", "12345")
    .with_label("ip_address", "192.168.1.100")
)

json_entry = generic_entry('{"event": "user_login", "success": true}')
metric = metric_entry('{"cpu_usage": 45.2, "memory": 1024}')

entries = [basic_entry, detailed_entry, json_entry, metric]


def main() -> int:
    print("Created log entries:")
    for number, entry in enumerate(entries, start=1):
        print(f"{number}. {entry.message} (payload_type: {entry.payload_type})")

    client = Client.from_env()
    try:
        with client:
            for entry in entries:
                client.send(entry)
    except AgentConnectionError as exc:
        print(f"\nAgent not reachable ({exc}); NDJSON that would be sent:")
        sys.stdout.write(encode_entries(entries))
        return 0

    print(f"\nSent {len(entries)} entries to {client.target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
