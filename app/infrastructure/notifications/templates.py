"""Message body templates.

A TemplateRenderer looks up a template by (channel, name) and reports one of
three outcomes: rendered text, not found, or an error (raised). The
TemplateResolver walks the fallback candidates ``[<event kind>, "default"]``
and returns the first rendered body.

Usage:
    renderer = YAMLTemplateRenderer(Path("templates"))
    resolver = TemplateResolver(renderer)
    body = resolver.resolve_body(ProviderKind.CHAT, EventKind.OPENED, context)
"""

import re
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional

import yaml

from infrastructure.logging import get_module_logger
from infrastructure.notifications.exceptions import NoTemplateError, TemplateRenderError
from infrastructure.notifications.models import ProviderKind
from models.incidents import EventKind

logger = get_module_logger()

DEFAULT_TEMPLATE = "default"

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][\w.]*)\s*\}\}")


class RenderStatus(Enum):
    RENDERED = "rendered"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RenderResult:
    """Outcome of a render attempt that did not fail."""

    status: RenderStatus
    text: Optional[str] = None

    @property
    def is_found(self) -> bool:
        return self.status == RenderStatus.RENDERED

    @classmethod
    def rendered(cls, text: str) -> "RenderResult":
        return cls(status=RenderStatus.RENDERED, text=text)

    @classmethod
    def not_found(cls) -> "RenderResult":
        return cls(status=RenderStatus.NOT_FOUND)


class TemplateRenderer(ABC):
    """Renders named templates for a channel."""

    @abstractmethod
    def render(self, channel: str, name: str, context: Mapping[str, Any]) -> RenderResult:
        """Render template ``name`` for ``channel``.

        Args:
            channel: Channel kind value (e.g. "chat")
            name: Template name (an event kind value or "default")
            context: Variables available to the template

        Returns:
            RenderResult.rendered(text), or RenderResult.not_found()

        Raises:
            TemplateRenderError: If the template exists but cannot be rendered.
        """
        pass


def _lookup(context: Mapping[str, Any], path: str) -> Any:
    head, *rest = path.split(".")
    if head not in context:
        raise TemplateRenderError(f"Unknown template variable: {head}")

    value = context[head]
    for part in rest:
        if isinstance(value, Mapping):
            if part not in value:
                raise TemplateRenderError(f"Unknown template variable: {path}")
            value = value[part]
        elif hasattr(value, part):
            value = getattr(value, part)
        else:
            raise TemplateRenderError(f"Unknown template variable: {path}")
    return value


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def interpolate(template: str, context: Mapping[str, Any]) -> str:
    """Replace ``{{ dotted.path }}`` placeholders with values from ``context``.

    Each path segment is read as a mapping key or an attribute. Enums render
    as their value, None as an empty string.

    Raises:
        TemplateRenderError: If a placeholder refers to an unknown variable.
    """
    return _PLACEHOLDER.sub(lambda m: _to_text(_lookup(context, m.group(1))), template)


class YAMLTemplateRenderer(TemplateRenderer):
    """Renderer for YAML template files, one file per channel.

    ``<templates_dir>/<channel>.yml`` maps template names to template
    strings. A missing file means every template for that channel is not
    found; a malformed file is an error.

    Attributes:
        templates_dir: Directory containing the YAML files
        use_cache: Whether parsed files are kept in memory
    """

    def __init__(self, templates_dir: Path, use_cache: bool = True):
        self.templates_dir = Path(templates_dir)
        self.use_cache = use_cache
        self._cache: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()

        if not self.templates_dir.is_dir():
            raise ValueError(f"Templates directory not found: {self.templates_dir}")

        logger.info(
            "initialized_yaml_template_renderer",
            templates_dir=str(self.templates_dir),
            use_cache=use_cache,
        )

    def render(self, channel: str, name: str, context: Mapping[str, Any]) -> RenderResult:
        template = self._load(channel).get(name)
        if template is None:
            return RenderResult.not_found()
        return RenderResult.rendered(interpolate(template, context))

    def _load(self, channel: str) -> Dict[str, str]:
        with self._lock:
            if self.use_cache and channel in self._cache:
                return self._cache[channel]

            path = self.templates_dir / f"{channel}.yml"
            templates: Dict[str, str] = {}
            if path.exists():
                try:
                    with open(path, "r", encoding="utf-8") as f:
                        data = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    logger.error("template_parse_error", file=str(path), error=str(e))
                    raise TemplateRenderError(f"Failed to parse {path}: {e}") from e

                if data is not None and not isinstance(data, dict):
                    raise TemplateRenderError(
                        f"{path} must map template names to strings"
                    )
                templates = {str(k): str(v) for k, v in (data or {}).items()}

            logger.debug(
                "loaded_templates",
                channel=channel,
                file=str(path),
                template_count=len(templates),
            )

            if self.use_cache:
                self._cache[channel] = templates
            return templates


class TemplateResolver:
    """Resolves a message body through the template fallback chain."""

    def __init__(self, renderer: TemplateRenderer):
        self.renderer = renderer

    def candidates(self, kind: EventKind) -> Iterator[str]:
        """Template names to try, most specific first."""
        yield kind.value
        yield DEFAULT_TEMPLATE

    def resolve_body(
        self,
        channel: ProviderKind,
        kind: EventKind,
        context: Mapping[str, Any],
    ) -> str:
        """Render the first available template for ``channel`` and ``kind``.

        Not-found results fall through to the next candidate. Any error the
        renderer raises propagates immediately.

        Returns:
            The rendered body with surrounding whitespace stripped.

        Raises:
            NoTemplateError: If no candidate template exists.
            TemplateRenderError: If a template exists but fails to render.
        """
        channel_name = ProviderKind(channel).value
        tried = []
        for name in self.candidates(kind):
            tried.append(name)
            result = self.renderer.render(channel_name, name, context)
            if result.is_found:
                logger.debug("template_resolved", channel=channel_name, template=name)
                return result.text.strip()
            logger.debug("template_not_found", channel=channel_name, template=name)

        raise NoTemplateError(channel_name, tried)
