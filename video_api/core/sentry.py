import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration


def init_sentry(dsn: str, environment: str = "dev",
                debug: bool = False) -> bool:
    """Enable Sentry only when a DSN is configured."""
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=[
            LoggingIntegration(level=None, event_level=None),
            FastApiIntegration(),
        ],
        traces_sample_rate=1.0 if debug else 0.2,
        # emails and tokens stay out of events outside debug
        send_default_pii=debug,
    )
    return True
