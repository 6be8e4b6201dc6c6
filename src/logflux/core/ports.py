"""Port interfaces for entry delivery.

Adapters that produce entries (such as the logging handler) depend on this
protocol rather than on the socket client directly.
"""

from typing import Protocol, runtime_checkable

from logflux.core.models import Entry


@runtime_checkable
class EntrySinkPort(Protocol):
    """Port for delivering entries to the agent.

    Examples: Client.
    """

    def send(self, entry: Entry) -> None:
        """Deliver one entry.

        Raises:
            LogFluxError: Delivery failed.
        """
        ...
