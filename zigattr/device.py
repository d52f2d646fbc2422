from __future__ import annotations

import logging
import typing

from zigattr import tlv
import zigattr.config as conf
from zigattr.const import MANUFACTURER_SPECIFIC_CLUSTER_MIN
from zigattr.exceptions import CodecError
from zigattr.registry import (
    AttributeKey,
    AttributeRegistry,
    DivisorTable,
    DomainEvent,
    RegistryKey,
    TlvKey,
    WriteRequest,
)
import zigattr.types as t
from zigattr.util import ListenableMixin, LocalLogMixin
from zigattr.zcl import codec, foundation

LOGGER = logging.getLogger(__name__)


class DeviceCodec(ListenableMixin, LocalLogMixin):
    """Attribute codec of a single device.

    Owns the device's `DivisorTable`. Reports must be handed over in arrival
    order so that announced divisors apply to the readings that follow them.
    Every produced `DomainEvent` is also sent to listeners as `domain_event`.
    """

    def __init__(
        self,
        registry: AttributeRegistry,
        config: dict[str, typing.Any] | None = None,
    ) -> None:
        super().__init__()
        self._config = conf.CODEC_SCHEMA(config or {})
        self._registry = registry
        self.divisors = DivisorTable(self._config[conf.CONF_DIVISORS])

    @property
    def name(self) -> str:
        return self._config[conf.CONF_NAME]

    @property
    def registry(self) -> AttributeRegistry:
        return self._registry

    def log(self, lvl: int, msg: str, *args, **kwargs) -> None:
        msg = "[%s] " + msg
        args = (self.name, *args)
        LOGGER.log(lvl, msg, *args, **kwargs)

    def _key(
        self, cluster: int, attribute: int, manufacturer_code: int | None
    ) -> AttributeKey:
        if manufacturer_code is None and cluster >= MANUFACTURER_SPECIFIC_CLUSTER_MIN:
            manufacturer_code = self._config.get(conf.CONF_MANUFACTURER_CODE)

        return AttributeKey(cluster, attribute, manufacturer_code)

    def _resolve(self, key: RegistryKey, raw: codec.ScalarValue) -> list[DomainEvent]:
        entry = self._registry.lookup(key)

        if entry is None:
            self.debug("Ignoring %s = %r", key, raw)
            return []

        event = self._registry.resolve(
            key,
            raw,
            self.divisors,
            offsets=self._config[conf.CONF_OFFSETS],
            precision=self._config[conf.CONF_PRECISION],
        )

        if event is None:
            self.debug("%s announced %s = %r", key, entry.announces, raw)
            return []

        self.debug("%s: %s = %r %s", key, event.name, event.value, event.unit or "")
        self.listener_event("domain_event", event)
        return [event]

    def handle_tlv(self, data: bytes | str) -> list[DomainEvent]:
        """Resolve every record of a TLV stream, in stream order."""
        kwargs = {
            "policy": self._config[conf.CONF_UNKNOWN_TYPE_POLICY],
            "skip_width": self._config[conf.CONF_UNKNOWN_TYPE_SKIP_WIDTH],
        }

        if isinstance(data, str):
            records = tlv.parse_hex(data, **kwargs)
            size = len(data) // 2
        else:
            records = tlv.parse(data, **kwargs)
            size = len(data)

        self.debug("Parsed %d TLV records from %d bytes", len(records), size)

        events = []
        for record in records:
            events.extend(self._resolve(TlvKey(record.tag), record.value))

        return events

    def handle_attribute(
        self,
        cluster: int,
        attribute: int,
        raw_hex: str,
        *,
        type_id: foundation.DataTypeId | int | None = None,
        manufacturer_code: int | None = None,
    ) -> list[DomainEvent]:
        """Resolve a single attribute value given as the hex of its wire bytes."""
        key = self._key(cluster, attribute, manufacturer_code)

        try:
            if self._registry.is_tlv_attribute(key):
                return self.handle_tlv(raw_hex)

            if type_id is None:
                entry = self._registry.lookup(key)
                if entry is None or entry.type_id is None:
                    self.debug("Ignoring %s = %s", key, raw_hex)
                    return []
                type_id = entry.type_id

            raw = codec.decode_hex(type_id, raw_hex)
        except CodecError as exc:
            self.warning("Dropping malformed value %r of %s: %s", raw_hex, key, exc)
            return []

        return self._resolve(key, raw)

    def handle_report(
        self,
        cluster: int,
        data: bytes | str,
        *,
        manufacturer_code: int | None = None,
    ) -> list[DomainEvent]:
        """Resolve the records of a report attributes payload, in arrival order."""
        if isinstance(data, str):
            try:
                data = t.hex_string_to_bytes(data)
            except ValueError:
                self.warning("Dropping malformed report %r of 0x%04X", data, cluster)
                return []

        # Xiaomi devices send some TLV streams as character strings
        tlv_attributes = {
            key.attribute
            for key in self._registry.tlv_attributes
            if key.cluster == cluster
        }
        reports = foundation.parse_attribute_reports(
            data, raw_attributes=tlv_attributes
        )
        events = []

        for report in reports:
            key = self._key(cluster, report.attribute, manufacturer_code)

            if self._registry.is_tlv_attribute(key) and isinstance(report.value, bytes):
                events.extend(self.handle_tlv(report.value))
            else:
                events.extend(self._resolve(key, report.value))

        return events

    def write_attribute(self, name: str, value: typing.Any) -> WriteRequest:
        """Encode a write of the reading `name`."""
        request = self._registry.encode_write(name, value, self.divisors)
        self.info("Writing %s = %r: %s", name, value, request)
        return request

    def build_tlv(self, values: dict[str, typing.Any]) -> bytes:
        """Encode writes of several TLV readings into one stream."""
        data = self._registry.encode_tlv(values, self.divisors)
        self.info("Writing %s as TLV %s", values, data.hex())
        return data

    def reset(self) -> None:
        """Forget every announced divisor and multiplier."""
        self.divisors.reset()

