"""BDD step definitions for client lifecycle and delivery features."""

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from logflux.adapters.transport.socket_client import Client
from logflux.core import exceptions
from logflux.core.exceptions import LogFluxError
from logflux.core.models import Entry

# Upper bound on sends while waiting for a hung-up agent to be noticed
MAX_FAILURE_SENDS = 50


@dataclass
class ClientScenarioContext:
    """Shared state between steps in a client scenario."""

    client: Client | None = None
    agent: Any = None
    error: Exception | None = None
    records: list[dict[str, Any]] = field(default_factory=list)


@pytest.fixture
def ctx() -> ClientScenarioContext:
    """Fresh scenario context for each test."""
    return ClientScenarioContext()


def _attempt(ctx: ClientScenarioContext, action: Any) -> None:
    """Run a client action, recording a LogFluxError instead of raising it."""
    try:
        action()
    except LogFluxError as e:
        ctx.error = e


# === Given ===
@given("a client for a Unix socket nobody listens on")
def step_client_missing_socket(ctx: ClientScenarioContext, missing_socket_path: str) -> None:
    ctx.client = Client.unix(missing_socket_path)


@given("a client for a listening agent")
def step_client_for_agent(ctx: ClientScenarioContext, unix_agent: Any) -> None:
    ctx.agent = unix_agent
    ctx.client = Client(unix_agent.target)


@given("a client connected to a listening agent")
def step_connected_client(ctx: ClientScenarioContext, unix_agent: Any) -> None:
    ctx.agent = unix_agent
    ctx.client = Client(unix_agent.target)
    ctx.client.connect()


# === When ===
@when("the client connects")
def step_connect(ctx: ClientScenarioContext) -> None:
    _attempt(ctx, ctx.client.connect)


@when(parsers.parse('an entry "{message}" is sent'))
def step_send_entry(ctx: ClientScenarioContext, message: str) -> None:
    _attempt(ctx, lambda: ctx.client.send(Entry(message)))


@when(parsers.parse("a {factory} entry with message '{message}' is sent"))
def step_send_factory_entry(ctx: ClientScenarioContext, factory: str, message: str) -> None:
    build = getattr(Entry, factory)
    _attempt(ctx, lambda: ctx.client.send(build(message)))


@when("the agent closes the connection")
def step_agent_hangs_up(ctx: ClientScenarioContext) -> None:
    ctx.agent.accept().close()


@when("entries are sent until one fails")
def step_send_until_failure(ctx: ClientScenarioContext) -> None:
    for i in range(MAX_FAILURE_SENDS):
        _attempt(ctx, lambda: ctx.client.send(Entry(f"filler {i}")))
        if ctx.error is not None:
            return


@when("the client is closed")
def step_close(ctx: ClientScenarioContext) -> None:
    ctx.client.close()


# === Then ===
@then(parsers.parse("the {operation} fails with {error_name}"))
def step_fails_with(ctx: ClientScenarioContext, operation: str, error_name: str) -> None:
    expected = getattr(exceptions, error_name)
    assert isinstance(ctx.error, expected), f"{operation} raised {ctx.error!r}"


@then("the client is not connected")
def step_not_connected(ctx: ClientScenarioContext) -> None:
    assert ctx.client.is_connected() is False


@then("the client holds no socket")
def step_no_socket(ctx: ClientScenarioContext) -> None:
    assert ctx.client._sock is None


@then(parsers.parse("the agent receives {count:d} newline-terminated JSON objects"))
def step_agent_receives(ctx: ClientScenarioContext, count: int) -> None:
    raw = ctx.agent.read_raw().decode("utf-8")
    assert raw.endswith("\n")
    lines = raw.split("\n")[:-1]
    assert len(lines) == count
    ctx.records = [json.loads(line) for line in lines]


@then(parsers.parse('the agent messages are "{messages}"'))
def step_agent_messages(ctx: ClientScenarioContext, messages: str) -> None:
    assert [r["message"] for r in ctx.records] == messages.split(",")


@then(parsers.parse('the received entry has payload type "{payload_type}"'))
def step_payload_type(ctx: ClientScenarioContext, payload_type: str) -> None:
    assert ctx.records[-1]["labels"]["payload_type"] == payload_type
