"""Review provider clients."""

from review_dashboard.provider.hostaway import HostawayClient, load_fixture

__all__ = ["HostawayClient", "load_fixture"]
