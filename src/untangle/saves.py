"""
Saved game format.

A saved game is an XML document describing the level number and every
vertex (id, position, connected vertex ids), stored as raw deflate data.
An integrity hash is attached as the last element before compression:

    <SavedGame>
      <Version>1</Version>
      <CreationDate>2026-01-01T12:00:00</CreationDate>
      <LevelNumber>3</LevelNumber>
      <VertexCount>10</VertexCount>
      <IntersectionCount>4</IntersectionCount>
      <Vertices>
        <Vertex Id="0" X="12.5" Y="-40.0">
          <ConnectedVertexId>1</ConnectedVertexId>
        </Vertex>
        ...
      </Vertices>
      <Hash>base64 SHA-1 of the document without this element</Hash>
    </SavedGame>

The hash detects transport corruption, not tampering. Vertex and
intersection counts are metadata only; loading always recomputes them.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import warnings
import xml.etree.ElementTree as ET
import zlib
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .config import GameConfig
from .game import Game
from .level import GameLevel
from .validation import TopologyError

logger = logging.getLogger(__name__)

CURRENT_VERSION = 1
SAVED_GAME_EXTENSION = ".usg"
HASH_ELEMENT_NAME = "Hash"

# Raw deflate stream, no zlib header or checksum
_DEFLATE_WBITS = -15


class SaveError(Exception):
    """Base exception for saving and loading games."""

    pass


class CorruptSaveError(SaveError):
    """Raised when a saved game is damaged or not a saved game at all."""

    pass


class UnsupportedSaveVersionError(SaveError):
    """Raised when a saved game was written by a newer format version."""

    pass


class StaleMetadataWarning(UserWarning):
    """Saved vertex or intersection counts differ from the loaded level."""

    pass


@dataclass
class SavedVertex:
    """
    A vertex in a saved level.

    Attributes:
        id: Identifier, unique within the saved game
        x: X coordinate
        y: Y coordinate
        connected_vertex_ids: Ids of the directly connected vertices
    """

    id: int
    x: float
    y: float
    connected_vertex_ids: list[int] = field(default_factory=list)


@dataclass
class SavedGame:
    """Contents of a saved game file."""

    version: int
    creation_date: datetime
    level_number: int
    vertex_count: int
    intersection_count: int
    vertices: list[SavedVertex] = field(default_factory=list)


# =============================================================================
# Conversion between games and saved games
# =============================================================================


def create_saved_game(game: Game, *, creation_date: Optional[datetime] = None) -> SavedGame:
    """Capture the current level of a game."""
    level = game.level
    vertices = [
        SavedVertex(
            id=vertex.index,
            x=vertex.x,
            y=vertex.y,
            connected_vertex_ids=vertex.connected_indices,
        )
        for vertex in level.vertices
    ]
    return SavedGame(
        version=CURRENT_VERSION,
        creation_date=creation_date if creation_date is not None else datetime.now(),
        level_number=game.level_number,
        vertex_count=level.vertex_count,
        intersection_count=level.intersection_count,
        vertices=vertices,
    )


def game_from_saved(saved: SavedGame, *, config: Optional[GameConfig] = None) -> Game:
    """
    Rebuild a game from a saved game.

    Raises:
        UnsupportedSaveVersionError: If the format version is too new
        CorruptSaveError: If the vertices do not describe a valid graph
    """
    if saved.version > CURRENT_VERSION:
        raise UnsupportedSaveVersionError(
            f"Saved game version {saved.version} is newer than supported version "
            f"{CURRENT_VERSION}"
        )

    known_ids = {vertex.id for vertex in saved.vertices}
    for vertex in saved.vertices:
        for connected_id in vertex.connected_vertex_ids:
            if connected_id not in known_ids:
                raise CorruptSaveError(
                    f"Vertex {vertex.id} is connected to unknown vertex {connected_id}"
                )

    try:
        level = GameLevel.from_saved(saved.vertices, config=config)
    except TopologyError as exc:
        raise CorruptSaveError(f"Saved game has an invalid graph: {exc}") from exc

    if (
        saved.vertex_count != level.vertex_count
        or saved.intersection_count != level.intersection_count
    ):
        warnings.warn(
            f"Saved game metadata is stale: {saved.vertex_count} vertices and "
            f"{saved.intersection_count} intersections recorded, "
            f"{level.vertex_count} and {level.intersection_count} found",
            StaleMetadataWarning,
            stacklevel=2,
        )

    return Game(level, saved.level_number, config=config)


# =============================================================================
# XML encoding
# =============================================================================


def _text_element(parent: ET.Element, tag: str, text: str) -> None:
    ET.SubElement(parent, tag).text = text


def _to_element(saved: SavedGame) -> ET.Element:
    root = ET.Element("SavedGame")
    _text_element(root, "Version", str(saved.version))
    _text_element(root, "CreationDate", saved.creation_date.isoformat())
    _text_element(root, "LevelNumber", str(saved.level_number))
    _text_element(root, "VertexCount", str(saved.vertex_count))
    _text_element(root, "IntersectionCount", str(saved.intersection_count))

    vertices = ET.SubElement(root, "Vertices")
    for vertex in saved.vertices:
        # repr() round-trips floats exactly
        element = ET.SubElement(
            vertices,
            "Vertex",
            {"Id": str(vertex.id), "X": repr(float(vertex.x)), "Y": repr(float(vertex.y))},
        )
        for connected_id in vertex.connected_vertex_ids:
            _text_element(element, "ConnectedVertexId", str(connected_id))

    return root


def _required_text(root: ET.Element, tag: str) -> str:
    element = root.find(tag)
    if element is None or element.text is None:
        raise CorruptSaveError(f"Saved game is missing <{tag}>")
    return element.text


def _from_element(root: ET.Element) -> SavedGame:
    vertices_element = root.find("Vertices")
    if vertices_element is None:
        raise CorruptSaveError("Saved game is missing <Vertices>")

    try:
        vertices = [
            SavedVertex(
                id=int(element.attrib["Id"]),
                x=float(element.attrib["X"]),
                y=float(element.attrib["Y"]),
                connected_vertex_ids=[
                    int(child.text or "") for child in element.findall("ConnectedVertexId")
                ],
            )
            for element in vertices_element.findall("Vertex")
        ]
        return SavedGame(
            version=int(_required_text(root, "Version")),
            creation_date=datetime.fromisoformat(_required_text(root, "CreationDate")),
            level_number=int(_required_text(root, "LevelNumber")),
            vertex_count=int(_required_text(root, "VertexCount")),
            intersection_count=int(_required_text(root, "IntersectionCount")),
            vertices=vertices,
        )
    except (KeyError, ValueError) as exc:
        raise CorruptSaveError(f"Saved game has an unreadable value: {exc}") from exc


def compute_hash(root: ET.Element) -> str:
    """Base64 SHA-1 of the compact XML serialization of `root`."""
    payload = ET.tostring(root, encoding="unicode").encode("utf-8")
    return base64.b64encode(hashlib.sha1(payload).digest()).decode("ascii")


def encode_saved_game(saved: SavedGame) -> str:
    """Serialize a saved game to XML text, with the hash attached."""
    root = _to_element(saved)
    _text_element(root, HASH_ELEMENT_NAME, compute_hash(root))
    return ET.tostring(root, encoding="unicode")


def decode_saved_game(text: str) -> SavedGame:
    """
    Parse and verify XML text produced by encode_saved_game().

    Raises:
        CorruptSaveError: If the XML is malformed, the hash is missing or
            does not match, or a required section is missing or unreadable
        UnsupportedSaveVersionError: If the format version is too new
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise CorruptSaveError(f"Saved game is not valid XML: {exc}") from exc

    if root.tag != "SavedGame":
        raise CorruptSaveError(f"Unexpected root element <{root.tag}>")

    hash_element = root.find(HASH_ELEMENT_NAME)
    if hash_element is None:
        raise CorruptSaveError("Saved game has no integrity hash")
    root.remove(hash_element)

    if (hash_element.text or "") != compute_hash(root):
        raise CorruptSaveError("Saved game integrity hash does not match")

    saved = _from_element(root)
    if saved.version > CURRENT_VERSION:
        raise UnsupportedSaveVersionError(
            f"Saved game version {saved.version} is newer than supported version "
            f"{CURRENT_VERSION}"
        )
    return saved


# =============================================================================
# Bytes and files
# =============================================================================


def dumps(game: Game) -> bytes:
    """Serialize a game to compressed saved game bytes."""
    text = encode_saved_game(create_saved_game(game))
    compressor = zlib.compressobj(wbits=_DEFLATE_WBITS)
    return compressor.compress(text.encode("utf-8")) + compressor.flush()


def loads(data: bytes, *, config: Optional[GameConfig] = None) -> Game:
    """
    Load a game from compressed saved game bytes.

    Raises:
        CorruptSaveError: If the data is damaged
        UnsupportedSaveVersionError: If the format version is too new
    """
    try:
        text = zlib.decompress(data, wbits=_DEFLATE_WBITS).decode("utf-8")
    except (zlib.error, UnicodeDecodeError) as exc:
        raise CorruptSaveError(f"Saved game cannot be decompressed: {exc}") from exc

    return game_from_saved(decode_saved_game(text), config=config)


def save_game(game: Game, path: Union[str, Path]) -> Path:
    """Write a game to a saved game file. Returns the path written."""
    path = Path(path)
    path.write_bytes(dumps(game))
    logger.info("Saved level %d to %s", game.level_number, path)
    return path


def load_game(path: Union[str, Path], *, config: Optional[GameConfig] = None) -> Game:
    """
    Read a game from a saved game file.

    Raises:
        OSError: If the file cannot be read
        CorruptSaveError: If the file is damaged
        UnsupportedSaveVersionError: If the file was written by a newer version
    """
    path = Path(path)
    try:
        game = loads(path.read_bytes(), config=config)
    except SaveError as exc:
        logger.warning("Failed to load %s: %s", path, exc)
        raise
    logger.info("Loaded level %d from %s", game.level_number, path)
    return game


__all__ = [
    "CURRENT_VERSION",
    "SAVED_GAME_EXTENSION",
    "SaveError",
    "CorruptSaveError",
    "UnsupportedSaveVersionError",
    "StaleMetadataWarning",
    "SavedVertex",
    "SavedGame",
    "create_saved_game",
    "game_from_saved",
    "compute_hash",
    "encode_saved_game",
    "decode_saved_game",
    "dumps",
    "loads",
    "save_game",
    "load_game",
]
