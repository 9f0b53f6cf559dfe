"""Default configuration values for asyncscribe."""

DEFAULTS: dict[str, object] = {
    # Discovery
    "DISCOVERY_PATHS": (),
    # Schema naming: False -> "Order", True -> "shop.models.Order"
    "USE_FQN": False,
    # Payload resolution
    "PAYLOAD_ENVELOPES": (),
    # Channel name templates, e.g. {"env": "prod"} for "orders.{env}"
    "PLACEHOLDERS": {},
    # Scanner strategies applied to every protocol plugin
    "ENABLED_SCANNERS": (
        "class-channels",
        "class-operations",
        "method-channels",
        "method-operations",
    ),
    # Runner
    "SCAN_WORKERS": 1,
    "RAISE_ON_ERROR": False,
}
