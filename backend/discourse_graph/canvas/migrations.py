"""
Shape schema migrations for persisted discourse-node shape records.

Versions are assigned once and never renumbered or reordered: saved canvases
record the last version applied to them, and every migration above that
version runs, in ascending order, the next time the canvas is loaded.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from discourse_graph.ir.errors import MigrationSkip

logger = logging.getLogger(__name__)

SHAPE_TYPE = "discourse-node"
SEQUENCE_ID = "com.discourse-graph.obsidian.discourse-node"

Record = Dict[str, Any]


def is_discourse_node_shape(record: Any) -> bool:
    return (
        isinstance(record, dict)
        and record.get("typeName") == "shape"
        and record.get("type") == SHAPE_TYPE
    )


@dataclass(frozen=True)
class Migration:
    name: str
    version: int
    up: Callable[[Record], Record]
    applies_to: Callable[[Any], bool] = is_discourse_node_shape

    @property
    def id(self) -> str:
        return f"{SEQUENCE_ID}/{self.version}"


@dataclass
class MigrationOutcome:
    record: Record
    version: int
    applied: List[str] = field(default_factory=list)


class MigrationSequence:
    def __init__(self, sequence_id: str, migrations: List[Migration]):
        versions = [m.version for m in migrations]
        if versions != list(range(1, len(migrations) + 1)):
            raise ValueError(
                f"Migration versions for {sequence_id} must be 1..n in order, got {versions}"
            )
        self.sequence_id = sequence_id
        self.migrations = list(migrations)

    @property
    def current_version(self) -> int:
        return self.migrations[-1].version if self.migrations else 0

    def pending(self, stored_version: int) -> List[Migration]:
        return [m for m in self.migrations if m.version > stored_version]

    def migrate_record(self, record: Record, stored_version: int = 0) -> MigrationOutcome:
        """
        Upgrade one record from `stored_version` to the current version.

        The input record is never modified. Records no migration applies to
        come back unchanged. A record whose upgrade raises is logged and
        returned as it was so the rest of the canvas can still load.
        """
        if stored_version >= self.current_version:
            return MigrationOutcome(record=record, version=stored_version)

        upgraded = record
        applied: List[str] = []
        for migration in self.pending(stored_version):
            if not migration.applies_to(upgraded):
                continue
            try:
                upgraded = migration.up(upgraded)
            except MigrationSkip as e:
                logger.debug("[Migrations] %s skipped %s: %s", migration.id, record.get("id"), e)
                continue
            except Exception as e:
                logger.error(
                    "[Migrations] %s failed for record %s: %s",
                    migration.id, record.get("id") if isinstance(record, dict) else record, e,
                )
                return MigrationOutcome(record=record, version=stored_version)
            applied.append(migration.name)

        return MigrationOutcome(record=upgraded, version=self.current_version, applied=applied)

    def migrate_snapshot(self, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """
        Upgrade every record in a canvas snapshot.

        The stored version is read from and written back to
        ``snapshot["schema"]["sequences"][sequence_id]``. Both a ``records``
        list and a ``store`` mapping of id -> record are supported.
        """
        migrated = copy.copy(snapshot)
        schema = dict(migrated.get("schema") or {})
        sequences = dict(schema.get("sequences") or {})
        stored_version = _coerce_version(sequences.get(self.sequence_id))

        if "store" in migrated and isinstance(migrated["store"], dict):
            migrated["store"] = {
                key: self.migrate_record(rec, stored_version).record
                for key, rec in migrated["store"].items()
            }
        if "records" in migrated and isinstance(migrated["records"], list):
            migrated["records"] = [
                self.migrate_record(rec, stored_version).record
                for rec in migrated["records"]
            ]

        sequences[self.sequence_id] = max(stored_version, self.current_version)
        schema["sequences"] = sequences
        migrated["schema"] = schema
        return migrated


def _coerce_version(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


# ---- Migrations ----

def add_size_and_font_family(shape: Record) -> Record:
    """v1: default `size` to "s" and `fontFamily` to "draw" when absent."""
    props = shape.get("props")
    if props is None:
        props = {}
    elif not isinstance(props, dict):
        raise MigrationSkip("props is not a mapping")

    upgraded_props = dict(props)
    if upgraded_props.get("size") is None:
        upgraded_props["size"] = "s"
    if upgraded_props.get("fontFamily") is None:
        upgraded_props["fontFamily"] = "draw"

    upgraded = dict(shape)
    upgraded["props"] = upgraded_props
    return upgraded


DISCOURSE_NODE_MIGRATIONS = MigrationSequence(
    SEQUENCE_ID,
    [
        Migration(name="addSizeAndFontFamily", version=1, up=add_size_and_font_family),
    ],
)

CURRENT_SHAPE_VERSION = DISCOURSE_NODE_MIGRATIONS.current_version


def migrate_shape(record: Record, stored_version: Optional[int] = None) -> MigrationOutcome:
    """
    Upgrade a single shape record.

    Without `stored_version` the version stamped in the record's
    ``meta.schemaVersion`` is used, and the upgraded record is stamped with
    the new version.
    """
    if stored_version is not None:
        return DISCOURSE_NODE_MIGRATIONS.migrate_record(record, stored_version)

    meta = record.get("meta") if isinstance(record, dict) else None
    stored = _coerce_version(meta.get("schemaVersion") if isinstance(meta, dict) else None)
    outcome = DISCOURSE_NODE_MIGRATIONS.migrate_record(record, stored)
    if outcome.version > stored and is_discourse_node_shape(outcome.record):
        stamped = dict(outcome.record)
        stamped["meta"] = {**(meta if isinstance(meta, dict) else {}), "schemaVersion": outcome.version}
        outcome.record = stamped
    return outcome


def migrate_canvas(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    return DISCOURSE_NODE_MIGRATIONS.migrate_snapshot(snapshot)
