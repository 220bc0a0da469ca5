"""Channel registry mapping provider kinds to adapter classes.

The registry is the only place that knows which adapter implements which
ProviderKind. It is checked for completeness when built, so a kind with no
adapter fails at startup rather than at the first dispatch.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type

from infrastructure.logging import get_module_logger
from infrastructure.notifications.channels import (
    ChannelAdapter,
    ChatChannel,
    FileChannel,
    InternalLogChannel,
    MailChannel,
    VoiceCallChannel,
)
from infrastructure.notifications.exceptions import UnknownProviderKindError
from infrastructure.notifications.models import ProviderKind

logger = get_module_logger()

DEFAULT_ADAPTERS: Tuple[Type[ChannelAdapter], ...] = (
    MailChannel,
    FileChannel,
    InternalLogChannel,
    ChatChannel,
    VoiceCallChannel,
)


class ChannelRegistry:
    """Maps each ProviderKind to an adapter class and its constructor dependencies.

    Dependencies (transport clients, sender name, ...) are passed to the
    adapter constructor as keyword arguments alongside the merged settings.

    Example:
        registry = ChannelRegistry.default()
        registry.register(ChatChannel, client=HipChatClient(base_url=url))
        adapter = registry.create(ProviderKind.CHAT, merged_settings)
    """

    def __init__(self):
        self._adapters: Dict[ProviderKind, Tuple[Type[ChannelAdapter], Dict[str, Any]]] = {}

    @classmethod
    def default(
        cls,
        adapters: Iterable[Type[ChannelAdapter]] = DEFAULT_ADAPTERS,
        dependencies: Optional[Mapping[ProviderKind, Mapping[str, Any]]] = None,
    ) -> "ChannelRegistry":
        """Build a registry with an adapter for every ProviderKind.

        Raises:
            UnknownProviderKindError: If a ProviderKind is left without adapter.
        """
        registry = cls()
        dependencies = dependencies or {}
        for adapter_class in adapters:
            registry.register(adapter_class, **dependencies.get(adapter_class.kind, {}))
        registry.validate()
        return registry

    def register(self, adapter_class: Type[ChannelAdapter], **dependencies: Any) -> None:
        """Register ``adapter_class`` for its ``kind``, replacing any previous one."""
        kind = ProviderKind(adapter_class.kind)
        self._adapters[kind] = (adapter_class, dict(dependencies))
        logger.debug(
            "registered_channel_adapter",
            kind=kind.value,
            adapter=adapter_class.__name__,
        )

    def validate(self) -> None:
        """Check that every ProviderKind has an adapter.

        Raises:
            UnknownProviderKindError: For the first kind with no adapter.
        """
        for kind in ProviderKind:
            if kind not in self._adapters:
                raise UnknownProviderKindError(kind.value)

    def kinds(self) -> Tuple[ProviderKind, ...]:
        return tuple(self._adapters)

    def get(self, kind: ProviderKind) -> Type[ChannelAdapter]:
        """Return the adapter class for ``kind``.

        Raises:
            UnknownProviderKindError: If no adapter is registered.
        """
        try:
            return self._adapters[ProviderKind(kind)][0]
        except (KeyError, ValueError):
            raise UnknownProviderKindError(kind) from None

    def create(self, kind: ProviderKind, settings: Mapping[str, Any]) -> ChannelAdapter:
        """Construct the adapter for ``kind`` from merged settings.

        Raises:
            UnknownProviderKindError: If no adapter is registered.
            ConfigurationError: If the settings fail the adapter's validation.
        """
        adapter_class = self.get(kind)
        dependencies = self._adapters[ProviderKind(kind)][1]
        return adapter_class(settings, **dependencies)
