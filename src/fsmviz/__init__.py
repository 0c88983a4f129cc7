"""fsmviz: automatic layout and SVG rendering for finite state machines."""

__version__ = "0.1.0"

from fsmviz.exporters.svg import build_svg, export_svg, save_svg  # noqa: E402
from fsmviz.layout import auto_layout  # noqa: E402
from fsmviz.models import Automaton, State, Transition, UnknownStateError  # noqa: E402

render = export_svg

__all__ = [
    "Automaton",
    "State",
    "Transition",
    "UnknownStateError",
    "auto_layout",
    "build_svg",
    "export_svg",
    "render",
    "save_svg",
]
