"""Turn a maze into an SDF world made of box models.

The world fragment provides the ``world`` element. Every extra fragment
(light, gui, ground plane, physics) is appended under it, then one box
model per wall cell, named after the cell and posed at the cell's position.
"""

from importlib import resources
from pathlib import Path
from typing import Dict, Optional, Union

from sdfmaze.parsing import parse_source
from sdfmaze.shared import AppConfig, TagNotFoundError, get_logger
from sdfmaze.source import SourceBuffer, open_source
from sdfmaze.tree import (
    Document,
    Element,
    search_and_replace_attribute,
    search_and_replace_content,
    serialize,
)

from .generator import Maze

WORLD_TAG = "world"
MODEL_TAG = "model"
POSE_TAG = "pose"


class WorldBuilder:
    """Assemble world documents from fragments and maze walls.

    Fragments are read from ``WorldConfig.fragments_dir`` when set, otherwise
    from the fragments shipped with the package. Each fragment is read once
    and parsed anew for every use, so each box gets a tree of its own.

    Examples:
        >>> builder = WorldBuilder()
        >>> document = builder.build(generate_maze(5, 5, seed=1))
        >>> builder.write(document, "maze.world")
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or AppConfig.default()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "world_builder")
        self._sources: Dict[str, SourceBuffer] = {}

    def load_fragment(self, name: str) -> Document:
        """Parse one fragment into a fresh document."""
        return parse_source(self._source(name), self.config.parser, self.correlation_id)

    def _source(self, name: str) -> SourceBuffer:
        if name not in self._sources:
            fragments_dir = self.config.world.fragments_dir
            if fragments_dir is not None:
                source = open_source(Path(fragments_dir) / name, self.config.parser.encoding)
            else:
                resource = resources.files("sdfmaze").joinpath("fragments").joinpath(name)
                source = SourceBuffer.from_string(
                    resource.read_text(encoding=self.config.parser.encoding), name
                )
            self._sources[name] = source
        return self._sources[name]

    def build(self, maze: Maze) -> Document:
        """Build the world document for ``maze``.

        Raises:
            TagNotFoundError: If the world fragment has no ``world`` element
            SDFSyntaxError: If a fragment is malformed
        """
        world_config = self.config.world
        document = self.load_fragment(world_config.world_fragment)
        world = document.find(WORLD_TAG)
        if world is None:
            raise TagNotFoundError(WORLD_TAG)

        for fragment in world_config.extra_fragments:
            world.append(self.load_fragment(fragment).require_root())

        reserved = set(world_config.reserved_cells)
        boxes = 0
        for row, col in maze.walls():
            if (row, col) in reserved:
                continue
            self.add_box(
                world,
                box_id=row * maze.width + col,
                x=row * world_config.box_dimension,
                y=col * world_config.box_dimension,
                z=0.0,
            )
            boxes += 1

        self.logger.info(
            "World built",
            extra={"width": maze.width, "height": maze.height, "boxes": boxes}
        )
        return document

    def add_box(self, world: Element, box_id: int, x: float, y: float, z: float) -> Element:
        """Parse a box fragment, name and place it, and append it under ``world``.

        Returns:
            The appended model element
        """
        world_config = self.config.world
        box = self.load_fragment(world_config.box_fragment).require_root()

        search_and_replace_attribute(
            box, MODEL_TAG, "name", world_config.box_name_template.format(box_id=box_id)
        )
        search_and_replace_content(
            box.children, POSE_TAG, world_config.pose_template.format(x=x, y=y, z=z)
        )
        world.append(box)
        return box

    def write(
        self,
        document: Document,
        path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """Serialize ``document`` to ``path`` (default ``WorldConfig.output_path``)."""
        destination = Path(path or self.config.world.output_path)
        serialize(document, destination, self.config.serializer)
        return destination
