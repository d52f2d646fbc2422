"""Device profiles: attribute registries of known devices."""

from __future__ import annotations

import collections
import logging
import typing

import attrs

from zigattr.device import DeviceCodec
from zigattr.exceptions import RegistryError
from zigattr.registry import AttributeRegistry

_LOGGER = logging.getLogger(__name__)

RegistryFactory = typing.Callable[[], AttributeRegistry]

# Config keys whose values are mappings merged key by key
_MERGED_KEYS = ("divisors", "offsets", "precision")


def merge_config(
    base: typing.Mapping[str, typing.Any], override: typing.Mapping[str, typing.Any]
) -> dict[str, typing.Any]:
    """Merge a user config over a profile's default config."""
    merged = {**base, **override}

    for key in _MERGED_KEYS:
        if key in base and key in override:
            merged[key] = {**base[key], **override[key]}

    return merged


@attrs.frozen
class DeviceProfile:
    manufacturer: str | None
    model: str
    factory: RegistryFactory = attrs.field(eq=False)
    config: typing.Mapping[str, typing.Any] = attrs.field(
        factory=dict, converter=dict, eq=False, hash=False
    )

    def build_registry(self) -> AttributeRegistry:
        return self.factory()

    def create_codec(
        self, config: typing.Mapping[str, typing.Any] | None = None
    ) -> DeviceCodec:
        """Create a codec with a fresh registry and divisor table."""
        name = " ".join(filter(None, (self.manufacturer, self.model)))
        merged = merge_config({"name": name, **self.config}, config or {})

        return DeviceCodec(self.build_registry(), merged)


class DeviceProfileRegistry:
    """Registry of device profiles, keyed by manufacturer and model."""

    def __init__(self) -> None:
        self._registry: dict[str | None, dict[str, DeviceProfile]] = (
            collections.defaultdict(dict)
        )

    def register(
        self,
        manufacturer: str | None,
        *models: str,
        config: typing.Mapping[str, typing.Any] | None = None,
    ) -> typing.Callable[[RegistryFactory], RegistryFactory]:
        """Register a registry factory for one manufacturer and its models.

        A `None` manufacturer matches any manufacturer reporting the model.
        """

        def decorator(factory: RegistryFactory) -> RegistryFactory:
            for model in models:
                if model in self._registry[manufacturer]:
                    raise RegistryError(
                        f"Duplicate device profile {manufacturer!r} {model!r}"
                    )

                self._registry[manufacturer][model] = DeviceProfile(
                    manufacturer, model, factory, config or {}
                )

            return factory

        return decorator

    def get(self, manufacturer: str | None, model: str) -> DeviceProfile | None:
        profile = self._registry.get(manufacturer, {}).get(model)

        if profile is None and manufacturer is not None:
            profile = self._registry.get(None, {}).get(model)

        if profile is None:
            _LOGGER.debug("No device profile for %r %r", manufacturer, model)

        return profile

    def create_codec(
        self,
        manufacturer: str | None,
        model: str,
        config: typing.Mapping[str, typing.Any] | None = None,
    ) -> DeviceCodec | None:
        profile = self.get(manufacturer, model)

        if profile is None:
            return None

        return profile.create_codec(config)

    def __contains__(self, key: tuple[str | None, str]) -> bool:
        manufacturer, model = key
        return self.get(manufacturer, model) is not None

    def __iter__(self) -> typing.Iterator[DeviceProfile]:
        for models in self._registry.values():
            yield from models.values()


PROFILES = DeviceProfileRegistry()

from zigattr.devices import aqara, sonoff, sunricher, tuya  # noqa: E402, F401
