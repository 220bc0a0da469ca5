"""Channel adapter abstract base class.

All channel adapters (mail, file, internal_log, chat, voice_call) implement
this interface. The dispatcher depends only on it, so a new channel is
added by writing an adapter and registering it, without touching dispatch.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, FrozenSet, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from infrastructure.notifications.exceptions import ConfigurationError
from infrastructure.notifications.models import DeliveryResult, ProviderKind
from models.incidents import Event, EventKind

EVENTS_KEY = "events"


class ChannelAdapter(ABC):
    """Abstract base class for channel adapters.

    An adapter is built once per dispatch from the merged provider/notifier
    settings. Required settings are validated into ``config_model`` in the
    constructor, so a missing key surfaces as a single ConfigurationError
    before anything is sent.

    Class attributes:
        kind: ProviderKind this adapter implements
        config_model: Pydantic model of the settings the adapter needs
            (None when it needs none)
        DEFAULT_TARGET_EVENTS: Kinds delivered when settings carry no
            explicit ``events`` list

    Example Implementation:
        class PagerChannel(ChannelAdapter):
            kind = ProviderKind.PAGER
            config_model = PagerConfig
            DEFAULT_TARGET_EVENTS = frozenset({EventKind.ESCALATED_TO_ME})

            def deliver(self, kind, body, event):
                self._client.page(self.config.pager_id, body)
                return DeliveryResult.delivered(self.kind, "Paged")
    """

    kind: ClassVar[ProviderKind]
    config_model: ClassVar[Optional[Type[BaseModel]]] = None
    DEFAULT_TARGET_EVENTS: ClassVar[FrozenSet[EventKind]] = frozenset()

    def __init__(self, settings: Mapping[str, Any]):
        """Initialize the adapter.

        Args:
            settings: Merged provider/notifier settings for this dispatch.

        Raises:
            ConfigurationError: If required settings are missing or invalid.
        """
        self.settings = settings
        self.config = self.load_config(settings)

    @property
    def channel_name(self) -> str:
        """Channel identifier used for routing, templates and logging."""
        return self.kind.value

    @classmethod
    def default_target_events(cls) -> FrozenSet[EventKind]:
        return cls.DEFAULT_TARGET_EVENTS

    @classmethod
    def target_events(cls, settings: Mapping[str, Any]) -> FrozenSet[EventKind]:
        """Kinds this provider/notifier pair accepts.

        An explicit ``events`` list in settings replaces the defaults.

        Raises:
            ConfigurationError: If ``events`` is not a list of known kinds.
        """
        explicit = settings.get(EVENTS_KEY)
        if explicit is None:
            return cls.default_target_events()

        if isinstance(explicit, (str, bytes)) or not hasattr(explicit, "__iter__"):
            raise ConfigurationError(
                f"{EVENTS_KEY} must be a list of event kinds",
                channel=cls.kind.value,
            )

        kinds = set()
        for value in explicit:
            try:
                kinds.add(EventKind(value))
            except ValueError:
                raise ConfigurationError(
                    f"Unknown event kind in {EVENTS_KEY}: {value!r}",
                    channel=cls.kind.value,
                ) from None
        return frozenset(kinds)

    @classmethod
    def load_config(cls, settings: Mapping[str, Any]) -> Optional[BaseModel]:
        """Validate settings into the adapter's config model.

        Raises:
            ConfigurationError: Naming every missing key.
        """
        if cls.config_model is None:
            return None

        try:
            return cls.config_model.model_validate(dict(settings))
        except ValidationError as e:
            missing = [
                ".".join(str(part) for part in error["loc"])
                for error in e.errors()
                if error["type"] == "missing"
            ]
            if missing:
                message = f"Missing {cls.kind.value} settings: {', '.join(missing)}"
            else:
                message = f"Invalid {cls.kind.value} settings: {e.errors()[0]['msg']}"
            raise ConfigurationError(
                message, channel=cls.kind.value, missing_keys=missing
            ) from e

    @abstractmethod
    def deliver(self, kind: EventKind, body: str, event: Event) -> DeliveryResult:
        """Deliver a rendered body.

        Args:
            kind: Contextual event kind
            body: Rendered message body
            event: Event being notified about

        Returns:
            DeliveryResult with DELIVERED or SKIPPED status

        Raises:
            DeliveryError: If the transport fails.
        """
        pass
