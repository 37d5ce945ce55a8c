"""Per-service endpoint functions used by :class:`pyglobe.client.GlobeClient`."""
