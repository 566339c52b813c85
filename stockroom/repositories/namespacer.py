"""Tenant-scoped key derivation.

Keys have the shape ``user:<tenant>:<kind>:<entity-id>``. This module is the
only place keys are built or checked, so tenant isolation is enforced once.
"""
import secrets
import time

from stockroom.core.constants import ENTITY_KINDS, KEY_ROOT, KEY_SEPARATOR
from stockroom.core.errors import NotFoundError, ValidationError

_RANDOM_SUFFIX_BYTES = 8


def _check_segment(name, value):
    if not isinstance(value, str) or not value:
        raise ValidationError("{} must be a non-empty string".format(name))
    if KEY_SEPARATOR in value:
        raise ValidationError("{} must not contain '{}'".format(name, KEY_SEPARATOR))
    return value


def _check_kind(entity_kind):
    if entity_kind not in ENTITY_KINDS:
        raise ValueError("Unknown entity kind: {}".format(entity_kind))
    return entity_kind


class Namespacer:
    def derive_key(self, tenant_id, entity_kind, entity_id):
        return KEY_SEPARATOR.join(
            (
                KEY_ROOT,
                _check_segment("tenant id", tenant_id),
                _check_kind(entity_kind),
                _check_segment("entity id", entity_id),
            )
        )

    def prefix(self, tenant_id, entity_kind):
        return KEY_SEPARATOR.join(
            (KEY_ROOT, _check_segment("tenant id", tenant_id), _check_kind(entity_kind), "")
        )

    def new_entity_id(self):
        # Millisecond clock plus 64 random bits.
        return "{}_{}".format(time.time_ns() // 1_000_000, secrets.token_hex(_RANDOM_SUFFIX_BYTES))

    def new_key(self, tenant_id, entity_kind):
        return self.derive_key(tenant_id, entity_kind, self.new_entity_id())

    def belongs_to_tenant(self, key, tenant_id, entity_kind=None):
        if not isinstance(key, str) or not isinstance(tenant_id, str) or not tenant_id:
            return False
        parts = key.split(KEY_SEPARATOR)
        if len(parts) != 4:
            return False
        root, key_tenant, key_kind, entity_id = parts
        if root != KEY_ROOT or key_tenant != tenant_id or not entity_id:
            return False
        if entity_kind is not None and key_kind != entity_kind:
            return False
        return True

    def require_owned(self, key, tenant_id, entity_kind, label):
        """Raise the same ``NotFoundError`` a missing entity would."""
        if not self.belongs_to_tenant(key, tenant_id, entity_kind):
            raise NotFoundError("{} not found".format(label))
        return key


__all__ = ["Namespacer"]
