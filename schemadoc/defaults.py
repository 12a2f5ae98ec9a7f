"""Process-wide collector and recorder shared by tests, the plugin and the CLI."""
from typing import Any

from .config import app_config

from .recorder.recorder import Record, Recorder
from .registry.collector import TypeCollector

# Instâncias globais
type_collector = TypeCollector.from_config(app_config.render)
recorder = Recorder(
    type_collector,
    titles=app_config.titles,
    routes_as_titles=app_config.routes_as_titles,
)


def doc(record: Record, **options: Any) -> Record:
    """Add an interaction or channel event to the generated documentation"""
    return recorder.doc(record, **options)
