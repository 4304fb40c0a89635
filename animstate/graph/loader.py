"""
State graph loader.

Fills a StateGraph from one of two document dialects:
- native: `{"states": [...]}`
- foreign: `{"layers": [{"stateMachine": <native document>}, ...]}`, as
  exported by animation-authoring tools; only the first layer is read

Documents are read from dicts, JSON/YAML text or files.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from animstate.errors import DanglingTransitionError, GraphLoadError
from animstate.graph.model import State, StateGraph
from animstate.graph.schema import StateMachineDocument

logger = logging.getLogger(__name__)

DIALECTS = ("auto", "native", "foreign")


def detect_dialect(source: Any) -> str:
    """Pick the dialect of a decoded document: a top-level `layers` key means foreign."""
    if isinstance(source, dict) and "layers" in source:
        return "foreign"
    return "native"


class GraphLoader:
    """
    Load state machine documents into StateGraph instances.

    Loading is staged: the document is fully built and checked before any
    state is written into the target graph, so a failed load leaves the
    graph as it was.

    Example:
        ```python
        loader = GraphLoader()

        # Into an existing graph
        graph = StateGraph()
        loader.load_json(graph, {"states": [{"name": "Idle"}]})

        # Into a new graph
        graph = loader.parse_file("character.json")
        ```
    """

    def __init__(self, validate_targets: bool = True, dialect: str = "auto"):
        if dialect not in DIALECTS:
            raise ValueError(f"Unsupported dialect: {dialect}")
        self.validate_targets = validate_targets
        self.dialect = dialect

    def load(self, graph: StateGraph, source: Any, dialect: Optional[str] = None) -> bool:
        """
        Load a decoded document using the given (or configured) dialect.

        Returns:
            Result of the dialect loader
        """
        dialect = self.resolve_dialect(source, dialect)

        if dialect == "native":
            return self.load_json(graph, source)
        elif dialect == "foreign":
            return self.load_foreign_json(graph, source)
        else:
            raise ValueError(f"Unsupported dialect: {dialect}")

    def resolve_dialect(self, source: Any, dialect: Optional[str] = None) -> str:
        """Dialect a document would be loaded with, `auto` resolved by detection."""
        dialect = dialect or self.dialect
        if dialect == "auto":
            return detect_dialect(source)
        return dialect

    def load_json(self, graph: StateGraph, source: Any) -> bool:
        """
        Load a native dialect document.

        Transitions without conditions are skipped. States replace existing
        states of the same name.

        Args:
            graph: Graph to load into
            source: Decoded document

        Returns:
            True once the states have been written into the graph

        Raises:
            GraphLoadError: If the document has values of the wrong type
            DanglingTransitionError: If target validation is on and a
                transition points at a state the graph will not have
        """
        document = self._validate_document(source)

        staged: Dict[str, State] = {}
        for entry in document.states:
            state = entry.to_state()
            for transition_entry in entry.transitions:
                transition = transition_entry.to_transition(state.name)
                if transition is None:
                    logger.debug(
                        f"Skipping transition '{state.name}' -> "
                        f"'{transition_entry.destination_state}' without conditions"
                    )
                    continue
                if not state.add_transition(transition):
                    logger.warning(
                        f"State '{state.name}' already has a transition for "
                        f"trigger '{transition.trigger}', ignoring duplicate"
                    )
            if state.name in staged:
                logger.warning(f"Duplicate state '{state.name}' in document, last one wins")
            staged[state.name] = state

        if self.validate_targets:
            known = set(graph.state_names) | set(staged)
            dangling = [
                t
                for state in staged.values()
                for t in state.transitions.values()
                if t.to_state not in known
            ]
            if dangling:
                raise DanglingTransitionError(dangling)

        for state in staged.values():
            graph._put_state(state)

        logger.info(f"Loaded {len(staged)} states into graph ({graph.state_count()} total)")
        return True

    def load_foreign_json(self, graph: StateGraph, source: Any) -> bool:
        """
        Load a foreign dialect document by delegating its first layer.

        Returns:
            False if `layers` is missing or empty, or the first layer has no
            `stateMachine` (or a null one); otherwise the native loader's result
        """
        if not isinstance(source, dict) or "layers" not in source:
            logger.warning("Foreign document has no 'layers'")
            return False

        layers = source["layers"]
        if not isinstance(layers, list) or len(layers) == 0:
            logger.warning("Foreign document has no layers")
            return False

        first_layer = layers[0]
        if not isinstance(first_layer, dict) or first_layer.get("stateMachine") is None:
            logger.warning("First layer of foreign document has no 'stateMachine'")
            return False

        if len(layers) > 1:
            logger.debug(f"Ignoring {len(layers) - 1} additional layers")

        return self.load_json(graph, first_layer["stateMachine"])

    def load_bytes(
        self,
        graph: StateGraph,
        content: Union[str, bytes],
        format: str = "json",
        dialect: Optional[str] = None,
    ) -> bool:
        """Decode JSON or YAML text and load it."""
        return self.load(graph, self._decode(content, format), dialect)

    def load_file(
        self, graph: StateGraph, path: Union[str, Path], dialect: Optional[str] = None
    ) -> bool:
        """
        Load a document file into a graph.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is unsupported
        """
        return self.load(graph, self.read_file(path), dialect)

    def read_file(self, path: Union[str, Path]) -> Any:
        """
        Read and decode a document file without loading it.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is unsupported
            GraphLoadError: If the text cannot be decoded
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"State machine file not found: {path}")

        format = self._format_for(path)
        logger.debug(f"Loading state machine from {path}")
        return self._decode(path.read_bytes(), format)

    def parse_string(
        self, content: Union[str, bytes], format: str = "json", dialect: Optional[str] = None
    ) -> StateGraph:
        """
        Build a new graph from JSON or YAML text.

        Raises:
            GraphLoadError: If the text is invalid or the loader rejects it
        """
        graph = StateGraph()
        if not self.load_bytes(graph, content, format=format, dialect=dialect):
            raise GraphLoadError("Document has no loadable state machine")
        return graph

    def parse_file(self, path: Union[str, Path], dialect: Optional[str] = None) -> StateGraph:
        """
        Build a new graph from a file.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is unsupported
            GraphLoadError: If the document is invalid or the loader rejects it
        """
        graph = StateGraph()
        if not self.load_file(graph, path, dialect=dialect):
            raise GraphLoadError(f"No loadable state machine in {path}")
        return graph

    def validate_file(
        self, path: Union[str, Path], dialect: Optional[str] = None
    ) -> tuple[bool, str]:
        """
        Validate a state machine file.

        Returns:
            Tuple of (is_valid, message)
        """
        try:
            graph = self.parse_file(path, dialect=dialect)
            return True, (
                f"Valid state machine: {graph.state_count()} states, "
                f"{graph.transition_count()} transitions"
            )
        except FileNotFoundError as e:
            return False, f"File not found: {e}"
        except GraphLoadError as e:
            return False, f"Invalid state machine: {e}"
        except ValueError as e:
            return False, f"Invalid format: {e}"

    @staticmethod
    def _format_for(path: Path) -> str:
        if path.suffix in (".yaml", ".yml"):
            return "yaml"
        elif path.suffix == ".json":
            return "json"
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}")

    @staticmethod
    def _decode(content: Union[str, bytes], format: str) -> Any:
        try:
            if format == "json":
                return json.loads(content)
            elif format == "yaml":
                return yaml.safe_load(content)
        except (json.JSONDecodeError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise GraphLoadError(f"Could not parse {format} document: {e}") from e
        raise ValueError(f"Unsupported format: {format}")

    @staticmethod
    def _validate_document(source: Any) -> StateMachineDocument:
        if not isinstance(source, dict):
            raise GraphLoadError(
                f"State machine document must be an object, got {type(source).__name__}"
            )
        try:
            return StateMachineDocument.model_validate(source)
        except ValidationError as e:
            raise GraphLoadError(f"Invalid state machine document: {e}") from e
