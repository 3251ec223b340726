"""
untangle: The puzzle engine of a graph-untangling game.

Vertices connected by straight line segments start out tangled; the player
drags vertices until no two segments cross.

Modules:
- graph: Vertex, LineSegment and the Graph arena
- geometry: Segment crossing predicate and circular layout
- generator: Solvable, degree-bounded level generation
- level: GameLevel, the crossing index and interaction protocol
- game: Game session advancing through levels
- saves: Saved game format with integrity hash
- controller: GameController tying pointer events and save/load together
"""

__version__ = "0.1.0"

# Observable base class
from .base import Observable

# Configuration
from .config import DEFAULT_CONFIG, GameConfig

# Controller
from .controller import GameController

# Game session
from .game import Game

# Level generation
from .generator import GeneratedGraph, GeneratedVertex, LevelGenerator

# Geometry
from .geometry import circular_positions, count_crossings, segments_intersect

# Graph model
from .graph import Graph, LineSegment, Vertex

# Level engine
from .level import GameLevel

# Graph analysis
from .preprocessing import connected_components, has_independent_edges, is_connected

# Saved games
from .saves import (
    CorruptSaveError,
    SavedGame,
    SavedVertex,
    SaveError,
    StaleMetadataWarning,
    UnsupportedSaveVersionError,
    load_game,
    save_game,
)

# Shared types
from .types import (
    Event,
    EventType,
    LineSegmentState,
    Point,
    VertexState,
)

# Validation and errors
from .validation import (
    DuplicateSegmentError,
    FrozenGraphError,
    InteractionError,
    SelfConnectionError,
    TopologyError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Event",
    "EventType",
    "LineSegmentState",
    "Point",
    "VertexState",
    "Observable",
    # Configuration
    "GameConfig",
    "DEFAULT_CONFIG",
    # Graph model
    "Graph",
    "Vertex",
    "LineSegment",
    # Geometry
    "segments_intersect",
    "count_crossings",
    "circular_positions",
    # Graph analysis
    "connected_components",
    "is_connected",
    "has_independent_edges",
    # Generation
    "LevelGenerator",
    "GeneratedGraph",
    "GeneratedVertex",
    # Level and session
    "GameLevel",
    "Game",
    "GameController",
    # Saved games
    "SavedGame",
    "SavedVertex",
    "SaveError",
    "CorruptSaveError",
    "UnsupportedSaveVersionError",
    "StaleMetadataWarning",
    "save_game",
    "load_game",
    # Errors
    "ValidationError",
    "TopologyError",
    "SelfConnectionError",
    "DuplicateSegmentError",
    "FrozenGraphError",
    "InteractionError",
]
