"""HTTP transport settings shared by the integration clients."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class HttpSettings(InfrastructureSettings):
    """Outbound HTTP configuration.

    The dispatch engine applies no timeout or retry of its own; the only
    bound on a transport call is this per-request timeout.

    Environment Variables:
        HTTP_TIMEOUT_SECONDS: Per-request timeout for transport clients
    """

    HTTP_TIMEOUT_SECONDS: float = Field(
        default=60, gt=0, alias="HTTP_TIMEOUT_SECONDS"
    )
