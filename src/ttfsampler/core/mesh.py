"""Extraction of drawing and meshing inputs from decoded glyphs.

These helpers sit between the sampling engine and whatever consumes its
output (a vector renderer, a triangulator, a plotter):

- extract_path_commands: move/line/quad/close commands per path
- extract_mesh_data: sampled vertices, closed segment loops and hole markers
- contour_polyline: evenly spaced points along an arc-length sampling

Vertex displacement is an explicit pure function argument,
``displace(index, position, normal) -> position``, evaluated once per output
vertex. Normals are the unit direction between two neighbours rotated a
quarter turn clockwise.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from ttfsampler.core.geometry import Vec2, centroid, segment_normal
from ttfsampler.core.sampler import DEFAULT_SUBSAMPLES, sample_path
from ttfsampler.domain import DecodedGlyph, Path, Sampling

Displace = Callable[[int, Vec2, Vec2], Vec2]


class CommandType(Enum):
    """Drawing command kinds."""

    MOVE_TO = "move_to"
    LINE_TO = "line_to"
    QUAD_TO = "quad_to"
    CLOSE = "close"


@dataclass(frozen=True, slots=True)
class PathCommand:
    """One drawing command.

    Attributes:
        command: Command kind
        points: Target point for move/line, (control, end) for quad, empty for close
    """

    command: CommandType
    points: tuple[Vec2, ...] = ()

    def to_dict(self) -> dict:
        return {"command": self.command.value, "points": [list(p) for p in self.points]}


@dataclass
class MeshData:
    """Flattened glyph geometry for a constrained triangulator.

    Attributes:
        vertices: Sampled vertices of every path, concatenated in path order
        segments: (i, j) index pairs; each path forms a closed loop
        holes: One point per inner path, the mean of its sampled vertices
        outer_sampling: Sampling of the first outer path, if any
    """

    vertices: list[Vec2] = field(default_factory=list)
    segments: list[tuple[int, int]] = field(default_factory=list)
    holes: list[Vec2] = field(default_factory=list)
    outer_sampling: Sampling | None = None


def normal_offset(scale: Callable[[int, Vec2], float]) -> Displace:
    """Build a displacement that moves each vertex along its normal.

    Args:
        scale: Returns the signed offset for a vertex index and position

    Example:
        >>> push = normal_offset(lambda index, position: 2.0)
        >>> push(0, (1.0, 1.0), (0.0, -1.0))
        (1.0, -1.0)
    """

    def displace(index: int, position: Vec2, normal: Vec2) -> Vec2:
        amount = scale(index, position)
        return (position[0] + amount * normal[0], position[1] + amount * normal[1])

    return displace


def _path_commands(path: Path) -> list[PathCommand]:
    n = path.num_vertices
    vertices = path.vertices
    flags = path.flags
    step = -1 if path.is_inner else 1

    start = next((i for i, on in enumerate(flags) if on), None)
    if start is None:
        return []

    def at(k: int) -> int:
        return (start + step * k) % n

    commands = [PathCommand(CommandType.MOVE_TO, (vertices[start],))]
    k = 0
    while k < n:
        i1 = at(k + 1)
        if flags[i1]:
            commands.append(PathCommand(CommandType.LINE_TO, (vertices[i1],)))
            k += 1
        else:
            i2 = at(k + 2)
            commands.append(PathCommand(CommandType.QUAD_TO, (vertices[i1], vertices[i2])))
            k += 2
    commands.append(PathCommand(CommandType.CLOSE))
    return commands


def extract_path_commands(glyph: DecodedGlyph) -> list[PathCommand]:
    """Convert a glyph into move/line/quad/close drawing commands.

    Each path starts with a move to its first on-curve vertex and ends with
    a close. Inner paths are walked in reverse vertex order so that holes
    wind opposite to their outer path under a non-zero fill rule.

    Args:
        glyph: Decoded glyph

    Returns:
        Commands for all paths, in path order
    """
    commands: list[PathCommand] = []
    for path in glyph.paths:
        commands.extend(_path_commands(path))
    return commands


def extract_mesh_data(
    glyph: DecodedGlyph,
    subsamples: int = DEFAULT_SUBSAMPLES,
    enable_segment_sampling: bool = False,
    displace: Displace | None = None,
    gradient_step: int = 1,
) -> MeshData:
    """Sample every path of a glyph into triangulator input.

    Vertex indices are global across paths. The segments of a path link each
    of its vertices to the next and the last one back to the path's first.
    When ``displace`` is given, every vertex is passed through it together
    with the normal estimated from the undisplaced neighbours
    ``gradient_step`` indices away on either side within the same path.
    Hole markers are computed before displacement.

    Args:
        glyph: Decoded glyph
        subsamples: Subdivisions per span
        enable_segment_sampling: Also subdivide straight spans
        displace: Optional vertex displacement
        gradient_step: Neighbour distance used for normals

    Returns:
        Mesh data for the whole glyph

    Raises:
        ValueError: If gradient_step is less than 1
    """
    if gradient_step < 1:
        raise ValueError(f"gradient_step must be at least 1, got {gradient_step}")

    mesh = MeshData()
    loops: list[tuple[int, int]] = []

    for path in glyph.paths:
        sampling = sample_path(path, subsamples, enable_segment_sampling)
        count = len(sampling)
        if count == 0:
            continue

        first = len(mesh.vertices)
        mesh.vertices.extend(sampling.vertices)
        for j in range(count):
            mesh.segments.append((first + j, first + (j + 1) % count))
        loops.append((first, count))

        if path.is_inner:
            mesh.holes.append(centroid(sampling.vertices))
        elif mesh.outer_sampling is None:
            mesh.outer_sampling = sampling

    if displace is not None:
        source = list(mesh.vertices)
        for first, count in loops:
            for j in range(count):
                index = first + j
                before = source[first + (j - gradient_step) % count]
                after = source[first + (j + gradient_step) % count]
                normal = segment_normal(before, after)
                mesh.vertices[index] = displace(index, source[index], normal)

    return mesh


def contour_polyline(
    sampling: Sampling,
    samples: int,
    displace: Displace | None = None,
    gradient_step_factor: float = 1.0,
) -> list[Vec2]:
    """Evaluate a sampling at evenly spaced arc-length fractions.

    Produces ``samples`` points at ``t = i / samples`` followed by the first
    point again, so the polyline is explicitly closed. With ``displace`` the
    normal at ``t`` comes from the points at
    ``t +/- gradient_step_factor / samples``.

    Raises:
        ValueError: If samples is less than 1 or the sampling is empty
    """
    if samples < 1:
        raise ValueError(f"samples must be at least 1, got {samples}")

    step = 1.0 / samples
    gradient = gradient_step_factor * step

    polyline: list[Vec2] = []
    for i in range(samples):
        t = i * step
        vertex = sampling.evaluate(t)
        if displace is not None:
            normal = segment_normal(sampling.evaluate(t - gradient), sampling.evaluate(t + gradient))
            vertex = displace(i, vertex, normal)
        polyline.append(vertex)

    polyline.append(polyline[0])
    return polyline
