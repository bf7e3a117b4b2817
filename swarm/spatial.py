"""Uniform spatial grid for neighbor candidate queries, compiled with Numba."""

import math
import numpy as np
from numba import njit


# ============================================================================
# NUMBA JIT-COMPILED GRID FUNCTIONS
# ============================================================================

@njit(cache=True)
def get_cell_coords(x: float, y: float, cell_size: float, grid_w: int, grid_h: int):
    """Convert a 2D position to clamped (cx, cy) cell coordinates."""
    cx = int(math.floor(x / cell_size))
    cy = int(math.floor(y / cell_size))

    # Out-of-canvas positions collapse onto the edge cells
    cx = max(0, min(cx, grid_w - 1))
    cy = max(0, min(cy, grid_h - 1))

    return cx, cy


@njit(cache=True)
def assign_cells(
    positions: np.ndarray,
    cell_indices: np.ndarray,
    cell_size: float,
    grid_w: int,
    grid_h: int,
    num_points: int
):
    """Assign each point to a cell."""
    for i in range(num_points):
        cx, cy = get_cell_coords(positions[i, 0], positions[i, 1], cell_size, grid_w, grid_h)
        cell_indices[i] = cx + cy * grid_w


@njit(cache=True)
def build_cell_lists(
    cell_indices: np.ndarray,
    sorted_indices: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    num_points: int,
    num_cells: int
):
    """Build cell start indices and counts after sorting."""
    for i in range(num_cells):
        cell_starts[i] = -1
        cell_counts[i] = 0

    for i in range(num_points):
        cell = cell_indices[sorted_indices[i]]
        if cell_starts[cell] == -1:
            cell_starts[cell] = i
        cell_counts[cell] += 1


@njit(cache=True)
def gather_candidates(
    x: float,
    y: float,
    sorted_indices: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    cell_size: float,
    grid_w: int,
    grid_h: int
) -> np.ndarray:
    """Indices of every point in the 3x3 block of cells around (x, y), ascending."""
    cx, cy = get_cell_coords(x, y, cell_size, grid_w, grid_h)

    total = 0
    for dcy in range(-1, 2):
        ncy = cy + dcy
        if ncy < 0 or ncy >= grid_h:
            continue
        for dcx in range(-1, 2):
            ncx = cx + dcx
            if ncx < 0 or ncx >= grid_w:
                continue
            cell = ncx + ncy * grid_w
            if cell_starts[cell] != -1:
                total += cell_counts[cell]

    out = np.empty(total, dtype=np.int32)
    k = 0
    for dcy in range(-1, 2):
        ncy = cy + dcy
        if ncy < 0 or ncy >= grid_h:
            continue
        for dcx in range(-1, 2):
            ncx = cx + dcx
            if ncx < 0 or ncx >= grid_w:
                continue
            cell = ncx + ncy * grid_w
            start = cell_starts[cell]
            if start == -1:
                continue
            for j in range(cell_counts[cell]):
                out[k] = sorted_indices[start + j]
                k += 1

    out.sort()
    return out


# ============================================================================
# GRID CLASS
# ============================================================================

class SpatialGrid:
    """
    Bucket points into square cells so neighbor queries only scan nearby cells.

    Queries return a superset of the points within ``cell_size`` of the
    query position; callers apply their own exact distance test.
    """

    def __init__(self, width: float, height: float, cell_size: float):
        self.cell_size = float(cell_size)
        self.resize(width, height)
        self.num_points = 0
        self._cell_indices = np.zeros(0, dtype=np.int32)
        self._sorted_indices = np.zeros(0, dtype=np.int32)

    def resize(self, width: float, height: float):
        """Reallocate the cell arrays for a new canvas size."""
        self.grid_w = max(1, int(np.ceil(width / self.cell_size)))
        self.grid_h = max(1, int(np.ceil(height / self.cell_size)))
        self.num_cells = self.grid_w * self.grid_h
        self._cell_starts = np.full(self.num_cells, -1, dtype=np.int32)
        self._cell_counts = np.zeros(self.num_cells, dtype=np.int32)

    def build(self, positions: np.ndarray):
        """Rebuild the grid for an (n, 2) array of positions."""
        n = len(positions)
        self.num_points = n
        if len(self._cell_indices) != n:
            self._cell_indices = np.zeros(n, dtype=np.int32)
        positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(n, 2)

        assign_cells(
            positions, self._cell_indices,
            self.cell_size, self.grid_w, self.grid_h, n
        )

        # Stable sort keeps ascending point order inside each cell
        self._sorted_indices = np.argsort(self._cell_indices, kind="stable").astype(np.int32)

        build_cell_lists(
            self._cell_indices, self._sorted_indices,
            self._cell_starts, self._cell_counts,
            n, self.num_cells
        )

    def query(self, x: float, y: float) -> np.ndarray:
        """Candidate point indices near (x, y), in ascending order."""
        if self.num_points == 0:
            return np.zeros(0, dtype=np.int32)
        return gather_candidates(
            float(x), float(y),
            self._sorted_indices, self._cell_starts, self._cell_counts,
            self.cell_size, self.grid_w, self.grid_h
        )
