"""
Pytest plugin - writes the API document once the test session ends.

Enable with `pytest --schemadoc` (default output from SCHEMADOC_OUTPUT) or
`pytest --schemadoc=doc/API.md`.
"""

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def pytest_addoption(parser):
    group = parser.getgroup("schemadoc")
    group.addoption(
        "--schemadoc",
        action="store",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Write API documentation from recorded interactions",
    )


def pytest_configure(config):
    output = config.getoption("schemadoc", default=None)
    if output is None:
        return

    from schemadoc.config import app_config
    from schemadoc.defaults import recorder

    config._schemadoc = DocsPlugin(recorder, Path(output or app_config.output_path))
    config.pluginmanager.register(config._schemadoc, "schemadoc-writer")


class DocsPlugin:
    """Writes the recorder's interactions with MarkdownWriter at session end"""

    def __init__(self, recorder, output_path: Path, documented_actions: Optional[list] = None):
        self.recorder = recorder
        self.output_path = Path(output_path)
        self.documented_actions = documented_actions

    def pytest_sessionfinish(self, session, exitstatus):
        """Write the document (skipped when nothing was recorded)"""
        from schemadoc.config import app_config
        from schemadoc.exporter.markdown_writer import MarkdownWriter

        records = self.recorder.records()
        if not records:
            logger.info("No interactions recorded, API documentation not written")
            return

        actions = self.documented_actions or app_config.render.documented_actions
        writer = MarkdownWriter(self.recorder.collector, actions)
        writer.write(records, self.output_path)
