"""
Markdown Writer - Assembles recorded interactions into one API document.

Layout:
- stylesheet + sidebar table of contents (controllers -> actions)
- intro file (API_INTRO.md next to the output) or a default title
- "Types" catalogue of every resolved schema
- per controller/action: request, request body types, response, example
"""

import inspect
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..recorder.models import ChannelEvent, ChannelEventKind, Interaction
from ..registry.collector import TypeCollector
from ..typespec.type_names import qualified_name

logger = logging.getLogger(__name__)

STYLESHEET = '<link rel="stylesheet" href="https://unpkg.com/@picocss/pico@1.*/css/pico.min.css">\n'

STYLE = """<style>
   :root {
    --font-size: 12px
   }
   body {
    display: grid;
    grid-template-columns: 1fr 4fr;
    grid-template-areas: "aside main main main";
    grid-gap: 10px;
    height: 100%
    }
   aside {
    grid-area: aside;
    margin-top: 1em;
    border-right: 1px #eee solid;
    }
   main {
    grid-area: main;
    overflow-y: scroll;
    }
</style>
"""

DEFAULT_DOCUMENTED_ACTIONS = ("create", "update", "process")

Grouped = List[Tuple[str, List[Tuple[str, List[Any]]]]]


class MarkdownWriter:
    """Writes recorded interactions as a Markdown/HTML API document"""

    def __init__(self, collector: TypeCollector, documented_actions: Sequence[str] = DEFAULT_DOCUMENTED_ACTIONS):
        self.collector = collector
        self.documented_actions = set(documented_actions)

    def write(self, records: Iterable[Any], path) -> Path:
        """
        Write the document

        Args:
            records: Interactions and channel events, in recording order
            path: Output file (parent directories are created)

        Returns:
            Path of the written file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        content = self.render(records, path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)

        logger.info(f"Wrote API documentation to {path}")
        return path

    def render(self, records: Iterable[Any], path: Optional[Path] = None) -> str:
        """Render the whole document as a string"""
        grouped = group_records(records)
        lines: List[str] = [STYLESHEET, STYLE]

        self._write_table_of_contents(grouped, lines)
        lines.append('<main class="container">\n')
        self._write_intro(path, lines)
        lines.append(f"## Types\n\n{self.collector.get_all_types()}")

        for controller, actions in grouped:
            self._write_controller(controller, actions, lines)

        lines.append("</main>\n")
        return "\n".join(lines) + "\n"

    def _write_intro(self, path: Optional[Path], lines: List[str]) -> None:
        intro_file = find_intro_file(path) if path is not None else None
        if intro_file is None:
            lines.append("# API Documentation\n\n")
            return

        lines.append(intro_file.read_text(encoding="utf-8"))
        lines.append("\n\n## Endpoints\n\n")

    def _write_table_of_contents(self, grouped: Grouped, lines: List[str]) -> None:
        lines.append("<aside><section>")

        for controller, actions in grouped:
            title = controller.split(".")[-1].replace("Controller", "")
            lines.append(f" * #### [{title}](#{to_anchor(controller)})")
            for action, _ in actions:
                lines.append(f"   * [{action}](#{to_anchor(f'{controller}.{action}')})")

        lines.append("")
        lines.append("</section></aside>")

    def _write_controller(self, controller: str, actions, lines: List[str]) -> None:
        lines.append(f"## <a id={to_anchor(controller)}></a>{controller}")

        for action, records in actions:
            lines.append(f"### <a id={to_anchor(f'{controller}.{action}')}></a>{action}")
            for record in records:
                if isinstance(record, ChannelEvent):
                    self._write_channel_event(record, lines)
                elif isinstance(record, Interaction):
                    self._write_interaction(record, lines)
                else:
                    raise ValueError(f"Cannot write record of type {type(record).__name__}")

    def _write_channel_event(self, event: ChannelEvent, lines: List[str]) -> None:
        kind = event.kind
        lines.append(f"#### {kind.value.capitalize()}")

        if kind == ChannelEventKind.CONNECT:
            self._write_body(event.payload, lines)
            lines.append(f"* __Receive:__ {event.status}")
            return

        if kind == ChannelEventKind.REPLY:
            lines.append(f"* __Status:__ {event.status}")
        elif kind == ChannelEventKind.JOIN:
            lines.append(f"* __Topic:__ {event.topic}")
            lines.append(f"* __Receive:__ {event.status}")
        else:
            lines.append(f"* __Topic:__ {event.topic}")
            lines.append(f"* __Event:__ {event.event}")

        self._write_body(event.payload, lines)

    def _write_body(self, payload: Dict[str, Any], lines: List[str]) -> None:
        if payload:
            lines.extend(["* __Body:__", "```json", format_body_params(payload), "```"])

    def _write_interaction(self, record: Interaction, lines: List[str]) -> None:
        options = record.options

        lines.append(f"#### {options.get('description', '')}")
        lines.append(f"{options.get('detail', '')}")
        lines.append(action_documentation(record.handler, record.action))
        lines.append("##### Request")
        lines.append(f"* __Method:__ {record.method}")
        lines.append(f"* __Path:__ {record.route}")

        if record.action in self.documented_actions and record.handler is not None:
            lines.append("* __Request body types:__ \n\n")
            lines.append("Fields marked in **bold** are required.\n\n")
            lines.append(self.collector.param_spec_table(record.handler, record.action))

        if record.request_headers:
            lines.extend(["* __Request headers:__", "```"])
            lines.extend(f"{header}: {value}" for header, value in record.request_headers)
            lines.append("```")

        if record.params:
            lines.extend(["* __Request body:__", "```json", format_body_params(record.params), "```"])

        lines.append("")
        lines.append("##### Response")
        lines.append(f"* __Status__: {record.status}")

        if record.response_headers:
            lines.extend(["* __Response headers:__", "```"])
            lines.extend(f"{header}: {value}" for header, value in record.response_headers)
            lines.append("```")

        lines.append("* __Response body:__ \n\n")
        lines.append(self.collector.get_response_types(record.view) if record.view is not None else "")
        lines.extend(["###### Example", "```json", format_resp_body(record.response_body), "```", ""])


def action_documentation(handler: Any, action: Optional[str]) -> str:
    """Docstring of the handler method serving an action"""
    if handler is None or not action:
        return ""
    function = getattr(handler, action, None)
    return (inspect.getdoc(function) or "") if function is not None else ""


def find_intro_file(path: Path) -> Optional[Path]:
    """API.md -> API_INTRO.md, api_intro.md, API_INTRO, api_intro (first that exists)"""
    path_str = str(path)
    candidates = [
        re.sub(r"\.md$", r"_INTRO\g<0>", path_str, flags=re.IGNORECASE),
        re.sub(r"\.md$", r"_intro\g<0>", path_str, flags=re.IGNORECASE),
        f"{path_str}_INTRO",
        f"{path_str}_intro",
    ]
    for candidate in candidates:
        candidate_path = Path(candidate)
        if candidate_path != path and candidate_path.is_file():
            return candidate_path
    return None


def format_body_params(params: Any) -> str:
    return json.dumps(params, indent=2, default=str)


def format_resp_body(body: str) -> str:
    if not body:
        return ""
    try:
        return json.dumps(json.loads(body), indent=2)
    except ValueError:
        return body


def to_anchor(name: str) -> str:
    """UserController.create -> usercontroller-create"""
    return re.sub(r"\W+", "-", name.lower()).strip("-")


def group_records(records: Iterable[Any]) -> Grouped:
    """Group records by controller, then by action, keeping first-seen order"""
    by_controller: Dict[str, Dict[str, List[Any]]] = {}
    for record in records:
        actions = by_controller.setdefault(controller_of(record), {})
        actions.setdefault(action_of(record), []).append(record)

    return [(controller, list(actions.items())) for controller, actions in by_controller.items()]


def controller_of(record: Any) -> str:
    options = record.options
    if options.get("group_title"):
        return options["group_title"]
    if isinstance(record, Interaction) and record.handler is not None:
        return qualified_name(record.handler)

    module = options.get("module") or "Channels"
    if module.startswith("test_"):
        module = module[len("test_"):]
    return module


def action_of(record: Any) -> str:
    if isinstance(record, Interaction) and record.action:
        return record.action
    return record.options.get("description") or record.operation_id
