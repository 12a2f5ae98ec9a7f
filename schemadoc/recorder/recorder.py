"""
Recorder - Accumulates interactions observed while tests run.

Only successful (200/201) interactions are kept, one per route. Each kept
interaction triggers type resolution for the view that rendered it.
"""

import logging
import os
import threading
from typing import Any, Dict, List, Optional, Union

from ..registry.collector import TypeCollector
from .models import ChannelEvent, Interaction

logger = logging.getLogger(__name__)

DOCUMENTED_STATUSES = (200, 201)

Record = Union[Interaction, ChannelEvent]


class Recorder:
    """Thread-safe store of documented interactions and channel events"""

    def __init__(
        self,
        collector: TypeCollector,
        titles: Optional[Dict[str, str]] = None,
        routes_as_titles: bool = False,
    ):
        """
        Args:
            collector: Type collector that resolves the views of recorded interactions
            titles: Test module name -> group title used by the writer
            routes_as_titles: Describe interactions as "METHOD /route"
        """
        self.collector = collector
        self.titles = titles or {}
        self.routes_as_titles = routes_as_titles
        self._records: List[Record] = []
        self._lock = threading.Lock()

    def doc(self, record: Record, **options: Any) -> Record:
        """
        Add an interaction or channel event to the documentation

        Args:
            record: Interaction or ChannelEvent
            **options: description, detail, group_title, operation_id, ...

        Returns:
            The record, so calls can be chained in tests
        """
        if isinstance(record, ChannelEvent):
            record.options.update(self._options(record, options))
            with self._lock:
                self._records.append(record)
            return record

        if isinstance(record, Interaction):
            self._doc_interaction(record, options)
            return record

        raise TypeError(f"Cannot document {type(record).__name__}")

    def _doc_interaction(self, interaction: Interaction, options: Dict[str, Any]) -> None:
        if interaction.status == 401:
            logger.debug(f"Skipping unauthenticated {interaction.method} {interaction.route}")
            return

        if interaction.status not in DOCUMENTED_STATUSES:
            logger.debug(f"Skipping {interaction.method} {interaction.route} ({interaction.status})")
            return

        with self._lock:
            if self._route_exists(interaction):
                return

            if interaction.view is not None:
                self.collector.register_types(interaction.view)

            interaction.options.update(self._options(interaction, options))
            self._records.append(interaction)

    def _route_exists(self, interaction: Interaction) -> bool:
        key = interaction.route_key()
        return any(
            isinstance(record, Interaction) and record.route_key() == key
            for record in self._records
        )

    def _options(self, record: Record, options: Dict[str, Any]) -> Dict[str, Any]:
        options = dict(options)
        test_file, test_name = current_test()

        module = os.path.splitext(os.path.basename(test_file))[0] if test_file else ""
        options.setdefault("module", module)
        options.setdefault("file", test_file)
        if module in self.titles:
            options.setdefault("group_title", self.titles[module])

        if "description" not in options:
            if self.routes_as_titles and isinstance(record, Interaction):
                options["description"] = f"{record.method} {record.route}"
            else:
                options["description"] = format_test_name(test_name)

        options.setdefault("operation_id", record.operation_id)
        return options

    def records(self) -> List[Record]:
        """Recorded interactions and events, in recording order"""
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


def current_test() -> tuple[str, str]:
    """File and name of the running pytest test, from PYTEST_CURRENT_TEST"""
    value = os.environ.get("PYTEST_CURRENT_TEST", "")
    if not value:
        return "", ""

    node_id = value.rsplit(" ", 1)[0]
    parts = node_id.split("::")
    return parts[0], parts[-1] if len(parts) > 1 else ""


def format_test_name(name: str) -> str:
    """test_create_user[json] -> create user[json]"""
    if name.startswith("test_"):
        name = name[len("test_"):]
    return name.replace("_", " ")
