"""Example forwarding Python logging to a LogFlux agent.

Run with:
    LOGFLUX_AGENT_URL=tcp://127.0.0.1:5514 python examples/logging_example.py
"""

import logging

from logflux import Client, LogFluxHandler

client = Client.from_env()
client.connect()

logger = logging.getLogger("checkout")
logger.setLevel(logging.INFO)
logger.addHandler(LogFluxHandler(client, source="checkout-service"))

try:
    logger.info("order placed", extra={"order_id": "A-1001", "amount": 42.5})
    try:
        raise TimeoutError("payment gateway timed out")
    except TimeoutError:
        logger.exception("payment failed", extra={"order_id": "A-1001"})
finally:
    client.close()
