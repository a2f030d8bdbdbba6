"""Figure model, shapes, rotation tables"""
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Tuple

AREA_WIDTH, AREA_HEIGHT = 10, 20

Matrix = Tuple[Tuple[int, ...], ...]

class Point(NamedTuple):
    x: int
    y: int

    def __add__(self, other):
        return Point(self.x + other.x, self.y + other.y)

LEFT = Point(-1, 0)
RIGHT = Point(1, 0)
DOWN = Point(0, 1)

# Minimal bounding boxes; J and Z are the flipped L and S.
SHAPES: Dict[str, List[List[int]]] = {
    "I": [[1,1,1,1]],
    "J": [[1,0,0],[1,1,1]],
    "L": [[0,0,1],[1,1,1]],
    "O": [[1,1],[1,1]],
    "S": [[0,1,1],[1,1,0]],
    "T": [[0,1,0],[1,1,1]],
    "Z": [[1,1,0],[0,1,1]],
}

# I is listed twice to make it twice as likely.
FIGURE_CATALOG = ("I", "I", "L", "J", "S", "Z", "O", "T")

def rotate_cw(m): return tuple(tuple(r) for r in zip(*m[::-1]))

def orientations(shape) -> List[Matrix]:
    """Distinct clockwise rotations of shape, starting with shape itself."""
    first = tuple(tuple(r) for r in shape)
    res = [first]
    m = rotate_cw(first)
    while m != first:
        res.append(m)
        m = rotate_cw(m)
    return res

ROTATIONS: Dict[str, List[Matrix]] = {t: orientations(s) for t, s in SHAPES.items()}

@dataclass
class Figure:
    variant: str
    position: Point
    rotation: int = 0

    @property
    def matrix(self) -> Matrix:
        return ROTATIONS[self.variant][self.rotation]

    @property
    def width(self) -> int:
        return len(self.matrix[0])

    @property
    def height(self) -> int:
        return len(self.matrix)

    def rotated(self) -> int:
        """Index of the orientation that follows the current one."""
        return (self.rotation + 1) % len(ROTATIONS[self.variant])

    def cells(self) -> List[Point]:
        return cells_of(self.matrix, self.position)

def cells_of(matrix: Matrix, position: Point) -> List[Point]:
    return [Point(position.x + x, position.y + y)
            for y, row in enumerate(matrix)
            for x, v in enumerate(row) if v]

def new_figure(variant: str, width: int = AREA_WIDTH) -> Figure:
    w = len(ROTATIONS[variant][0][0])
    return Figure(variant, Point((width - w) // 2, 0))

def random_figure(rng, width: int = AREA_WIDTH) -> Figure:
    return new_figure(rng.choice(FIGURE_CATALOG), width)
